from datetime import date, datetime, time
from typing import Optional
from pydantic import BaseModel, Field

from .status import ScheduleStatus
from .train import Train


class Schedule(BaseModel):
    id: Optional[int] = None
    train_id: int = Field(...)
    destination: str = Field(..., max_length=100)
    departure_time: time = Field(...)
    arrival_time: time = Field(...)
    platform: str = Field(..., max_length=5)
    status: ScheduleStatus = ScheduleStatus.ON_TIME
    delay_minutes: int = 0
    schedule_date: date = Field(...)
    created_at: Optional[datetime] = None
    # set only when the query joined the owning train
    train: Optional[Train] = None
