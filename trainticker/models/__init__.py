from .status import ScheduleStatus
from .train import Train
from .schedule import Schedule
from .trainschedule import TrainScheduleDTO
from .stats import ScheduleStats

Train.model_rebuild()
Schedule.model_rebuild()

__all__ = [
    "ScheduleStatus",
    "Train",
    "Schedule",
    "TrainScheduleDTO",
    "ScheduleStats",
]
