from pydantic import BaseModel, ConfigDict, computed_field
from pydantic.alias_generators import to_camel


class ScheduleStats(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    on_time_count: int = 0
    delayed_count: int = 0
    cancelled_count: int = 0

    @computed_field(alias="totalCount")
    @property
    def total_count(self) -> int:
        return self.on_time_count + self.delayed_count + self.cancelled_count

    @computed_field(alias="onTimePercentage")
    @property
    def on_time_percentage(self) -> float:
        return self._percentage(self.on_time_count)

    @computed_field(alias="delayedPercentage")
    @property
    def delayed_percentage(self) -> float:
        return self._percentage(self.delayed_count)

    def _percentage(self, count: int) -> float:
        total = self.total_count
        return count / total * 100 if total > 0 else 0.0
