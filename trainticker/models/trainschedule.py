from datetime import time

from pydantic import BaseModel, ConfigDict, computed_field, field_serializer
from pydantic.alias_generators import to_camel

from .schedule import Schedule
from .status import ScheduleStatus


def status_label(status: ScheduleStatus) -> str:
    match status:
        case ScheduleStatus.ON_TIME:
            return "ON_TIME"
        case ScheduleStatus.DELAYED:
            return "DELAYED"
        case ScheduleStatus.CANCELLED:
            return "CANCELLED"
    raise ValueError(f"Unknown schedule status: {status!r}")


class TrainScheduleDTO(BaseModel):
    """Flattened train + schedule row as shown on the departure board."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    train_number: str
    train_name: str
    route: str
    destination: str
    departure_time: time
    arrival_time: time
    platform: str
    status: str
    delay_minutes: int

    @classmethod
    def from_schedule(cls, schedule: Schedule) -> "TrainScheduleDTO":
        """Project a schedule whose train has been joined by the query.

        Raises ValueError when ``schedule.train`` is missing; the read path
        never resolves trains lazily.
        """
        train = schedule.train
        if train is None:
            raise ValueError(
                f"Schedule {schedule.id} was loaded without its train (train_id={schedule.train_id})"
            )
        return cls(
            train_number=train.train_number,
            train_name=train.train_name,
            route=train.route,
            destination=schedule.destination,
            departure_time=schedule.departure_time,
            arrival_time=schedule.arrival_time,
            platform=schedule.platform,
            status=status_label(schedule.status),
            delay_minutes=schedule.delay_minutes,
        )

    @field_serializer("departure_time", "arrival_time")
    def _serialize_time(self, value: time) -> str:
        return value.strftime("%H:%M")

    @computed_field(alias="delayed")
    @property
    def is_delayed(self) -> bool:
        return self.status == ScheduleStatus.DELAYED.value

    @computed_field(alias="onTime")
    @property
    def is_on_time(self) -> bool:
        return self.status == ScheduleStatus.ON_TIME.value

    @computed_field(alias="formattedStatus")
    @property
    def formatted_status(self) -> str:
        if self.is_delayed and self.delay_minutes > 0:
            return f"{self.status} (+{self.delay_minutes} min)"
        return self.status
