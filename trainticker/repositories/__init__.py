from .train_repository import TrainRepository
from .schedule_repository import ScheduleRepository

__all__ = ["TrainRepository", "ScheduleRepository"]
