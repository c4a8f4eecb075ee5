from datetime import date, time
from typing import List

import asyncpg

from trainticker.models import Schedule, ScheduleStatus, Train


SCHEDULE_COLUMNS = """
    s.id, s.train_id, s.destination, s.departure_time, s.arrival_time,
    s.platform, s.status, s.delay_minutes, s.schedule_date, s.created_at
"""

# joined train columns, aliased so they don't collide with the schedule's
TRAIN_JOIN_COLUMNS = """
    t.train_number, t.train_name, t.route, t.created_at AS train_created_at
"""

SELECT_SCHEDULES = f"SELECT {SCHEDULE_COLUMNS} FROM schedules s"

SELECT_SCHEDULES_WITH_TRAIN = f"""
    SELECT {SCHEDULE_COLUMNS}, {TRAIN_JOIN_COLUMNS}
    FROM schedules s
    JOIN trains t ON t.id = s.train_id
"""


def contains_pattern(text: str) -> str:
    """ILIKE pattern matching `text` literally anywhere; use with ESCAPE '\\'."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def row_to_schedule(
    row: asyncpg.Record,
    with_train: bool = False,
    id_column: str = "id",
    created_column: str = "created_at",
) -> Schedule:
    train = None
    if with_train:
        train = Train(
            id=row["train_id"],
            train_number=row["train_number"],
            train_name=row["train_name"],
            route=row["route"],
            created_at=row["train_created_at"],
        )
    return Schedule(
        id=row[id_column],
        train_id=row["train_id"],
        destination=row["destination"],
        departure_time=row["departure_time"],
        arrival_time=row["arrival_time"],
        platform=row["platform"],
        status=ScheduleStatus(row["status"]),
        delay_minutes=row["delay_minutes"] or 0,
        schedule_date=row["schedule_date"],
        created_at=row[created_column],
        train=train,
    )


class ScheduleRepository:
    """Read queries over ``schedules``.

    Anything whose result is turned into a TrainScheduleDTO joins ``trains``
    in the same statement, so no per-row follow-up lookups are issued.
    """

    def __init__(self, conn: asyncpg.Connection):
        self.conn = conn

    async def _fetch(self, query: str, *args, with_train: bool = False) -> List[Schedule]:
        rows = await self.conn.fetch(query, *args)
        return [row_to_schedule(r, with_train=with_train) for r in rows]

    async def find_by_date(self, schedule_date: date) -> List[Schedule]:
        return await self._fetch(
            f"""
            {SELECT_SCHEDULES}
            WHERE s.schedule_date = $1
            ORDER BY s.departure_time
            """,
            schedule_date,
        )

    async def find_by_date_and_status(
        self, schedule_date: date, status: ScheduleStatus
    ) -> List[Schedule]:
        return await self._fetch(
            f"""
            {SELECT_SCHEDULES}
            WHERE s.schedule_date = $1 AND s.status = $2
            ORDER BY s.departure_time
            """,
            schedule_date,
            status.value,
        )

    async def find_upcoming(self, schedule_date: date, after: time) -> List[Schedule]:
        return await self._fetch(
            f"""
            {SELECT_SCHEDULES_WITH_TRAIN}
            WHERE s.schedule_date = $1 AND s.departure_time >= $2
            ORDER BY s.departure_time
            """,
            schedule_date,
            after,
            with_train=True,
        )

    async def find_by_date_with_train_info(self, schedule_date: date) -> List[Schedule]:
        return await self._fetch(
            f"""
            {SELECT_SCHEDULES_WITH_TRAIN}
            WHERE s.schedule_date = $1
            ORDER BY s.departure_time
            """,
            schedule_date,
            with_train=True,
        )

    async def find_by_destination_containing(self, destination: str) -> List[Schedule]:
        return await self._fetch(
            f"""
            {SELECT_SCHEDULES_WITH_TRAIN}
            WHERE s.destination ILIKE $1 ESCAPE '\\'
            ORDER BY s.departure_time
            """,
            contains_pattern(destination),
            with_train=True,
        )

    async def find_by_platform(self, platform: str) -> List[Schedule]:
        return await self._fetch(
            f"""
            {SELECT_SCHEDULES_WITH_TRAIN}
            WHERE s.platform = $1
            ORDER BY s.departure_time
            """,
            platform,
            with_train=True,
        )

    async def find_delayed(self, schedule_date: date) -> List[Schedule]:
        """Delayed schedules for the date, worst delay first."""
        return await self._fetch(
            f"""
            {SELECT_SCHEDULES_WITH_TRAIN}
            WHERE s.schedule_date = $1 AND s.status = $2
            ORDER BY s.delay_minutes DESC
            """,
            schedule_date,
            ScheduleStatus.DELAYED.value,
            with_train=True,
        )

    async def find_in_time_range(
        self, schedule_date: date, start: time, end: time
    ) -> List[Schedule]:
        # BETWEEN is inclusive on both ends; start > end simply matches nothing
        return await self._fetch(
            f"""
            {SELECT_SCHEDULES_WITH_TRAIN}
            WHERE s.schedule_date = $1 AND s.departure_time BETWEEN $2 AND $3
            ORDER BY s.departure_time
            """,
            schedule_date,
            start,
            end,
            with_train=True,
        )

    async def count_by_date_and_status(
        self, schedule_date: date, status: ScheduleStatus
    ) -> int:
        count = await self.conn.fetchval(
            "SELECT COUNT(*) FROM schedules WHERE schedule_date = $1 AND status = $2",
            schedule_date,
            status.value,
        )
        return int(count or 0)
