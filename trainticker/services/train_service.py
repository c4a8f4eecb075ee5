import logging
from datetime import date, datetime, time
from typing import Callable, Iterable, List, Optional

from trainticker.models import Schedule, ScheduleStats, ScheduleStatus, TrainScheduleDTO
from trainticker.repositories import ScheduleRepository, TrainRepository

logger = logging.getLogger(__name__)


def to_dtos(schedules: Iterable[Schedule]) -> List[TrainScheduleDTO]:
    return [TrainScheduleDTO.from_schedule(s) for s in schedules]


class TrainService:
    """
    Read-only queries behind the departure board.

    "Today" and "now" come from ``clock`` (server local time, ``datetime.now``
    unless a different callable is injected). Store errors are not caught
    here; they propagate to the HTTP layer.
    """

    def __init__(
        self,
        schedule_repository: ScheduleRepository,
        train_repository: TrainRepository,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.schedule_repository = schedule_repository
        self.train_repository = train_repository
        self.clock = clock or datetime.now

    def _today(self) -> date:
        return self.clock().date()

    async def get_todays_schedule(self) -> List[TrainScheduleDTO]:
        return await self.get_schedule_by_date(self._today())

    async def get_schedule_by_date(self, schedule_date: date) -> List[TrainScheduleDTO]:
        schedules = await self.schedule_repository.find_by_date_with_train_info(schedule_date)
        logger.debug("Found %d schedules for %s", len(schedules), schedule_date)
        return to_dtos(schedules)

    async def get_upcoming_departures(self) -> List[TrainScheduleDTO]:
        now = self.clock()
        after = now.time()
        schedules = await self.schedule_repository.find_upcoming(now.date(), after)
        logger.debug("Found %d departures from %s on %s", len(schedules), after, now.date())
        return to_dtos(schedules)

    async def get_schedules_by_destination(self, destination: str) -> List[TrainScheduleDTO]:
        schedules = await self.schedule_repository.find_by_destination_containing(destination)
        return to_dtos(schedules)

    async def get_schedules_by_platform(self, platform: str) -> List[TrainScheduleDTO]:
        schedules = await self.schedule_repository.find_by_platform(platform)
        return to_dtos(schedules)

    async def get_delayed_trains(self) -> List[TrainScheduleDTO]:
        schedules = await self.schedule_repository.find_delayed(self._today())
        return to_dtos(schedules)

    async def get_schedules_in_time_range(self, start: time, end: time) -> List[TrainScheduleDTO]:
        schedules = await self.schedule_repository.find_in_time_range(self._today(), start, end)
        logger.debug("Found %d schedules between %s and %s", len(schedules), start, end)
        return to_dtos(schedules)

    async def get_todays_stats(self) -> ScheduleStats:
        today = self._today()
        counts = {}
        for status in ScheduleStatus:
            counts[status] = await self.schedule_repository.count_by_date_and_status(today, status)
        return ScheduleStats(
            on_time_count=counts[ScheduleStatus.ON_TIME],
            delayed_count=counts[ScheduleStatus.DELAYED],
            cancelled_count=counts[ScheduleStatus.CANCELLED],
        )
