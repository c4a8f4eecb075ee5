from datetime import datetime
from typing import TYPE_CHECKING, Optional
from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from .schedule import Schedule


class Train(BaseModel):
    id: Optional[int] = None
    train_number: str = Field(..., max_length=10)
    train_name: str = Field(..., max_length=100)
    route: str = Field(..., max_length=200)
    created_at: Optional[datetime] = None
    # only populated by TrainRepository.find_all_with_schedules
    schedules: list["Schedule"] = Field(default_factory=list)
