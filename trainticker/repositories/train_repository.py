import logging
from typing import List, Optional

import asyncpg

from trainticker.models import Train
from trainticker.repositories.schedule_repository import contains_pattern, row_to_schedule

logger = logging.getLogger(__name__)

TRAIN_COLUMNS = "id, train_number, train_name, route, created_at"


def row_to_train(row: asyncpg.Record) -> Train:
    return Train(
        id=row["id"],
        train_number=row["train_number"],
        train_name=row["train_name"],
        route=row["route"],
        created_at=row["created_at"],
    )


class TrainRepository:
    """Parameterized queries over the ``trains`` table."""

    def __init__(self, conn: asyncpg.Connection):
        self.conn = conn

    async def find_by_id(self, train_id: int) -> Optional[Train]:
        row = await self.conn.fetchrow(
            f"SELECT {TRAIN_COLUMNS} FROM trains WHERE id = $1", train_id
        )
        return row_to_train(row) if row else None

    async def find_by_train_number(self, train_number: str) -> Optional[Train]:
        row = await self.conn.fetchrow(
            f"SELECT {TRAIN_COLUMNS} FROM trains WHERE train_number = $1",
            train_number,
        )
        return row_to_train(row) if row else None

    async def find_by_route_containing(self, route: str) -> List[Train]:
        rows = await self.conn.fetch(
            f"SELECT {TRAIN_COLUMNS} FROM trains WHERE route ILIKE $1 ESCAPE '\\' ORDER BY train_number",
            contains_pattern(route),
        )
        return [row_to_train(r) for r in rows]

    async def find_by_name_containing(self, train_name: str) -> List[Train]:
        rows = await self.conn.fetch(
            f"SELECT {TRAIN_COLUMNS} FROM trains WHERE train_name ILIKE $1 ESCAPE '\\' ORDER BY train_number",
            contains_pattern(train_name),
        )
        return [row_to_train(r) for r in rows]

    async def find_all(self) -> List[Train]:
        rows = await self.conn.fetch(
            f"SELECT {TRAIN_COLUMNS} FROM trains ORDER BY train_number"
        )
        return [row_to_train(r) for r in rows]

    async def find_all_with_schedules(self) -> List[Train]:
        """All trains, one entry each, with their schedules attached.

        Trains without schedules come back with an empty list.
        """
        rows = await self.conn.fetch(
            """
            SELECT t.id, t.train_number, t.train_name, t.route, t.created_at,
                   s.id AS schedule_id, s.train_id, s.destination,
                   s.departure_time, s.arrival_time, s.platform, s.status,
                   s.delay_minutes, s.schedule_date,
                   s.created_at AS schedule_created_at
            FROM trains t
            LEFT JOIN schedules s ON s.train_id = t.id
            ORDER BY t.train_number, s.schedule_date, s.departure_time
            """
        )
        trains: dict[int, Train] = {}
        for r in rows:
            train = trains.get(r["id"])
            if train is None:
                train = row_to_train(r)
                trains[r["id"]] = train
            if r["schedule_id"] is not None:
                train.schedules.append(
                    row_to_schedule(r, id_column="schedule_id", created_column="schedule_created_at")
                )
        return list(trains.values())

    async def exists_by_train_number(self, train_number: str) -> bool:
        return await self.conn.fetchval(
            "SELECT EXISTS (SELECT 1 FROM trains WHERE train_number = $1)",
            train_number,
        )

    async def save(self, train: Train) -> Optional[Train]:
        """Insert a new train, or update an existing one when ``train.id`` is set.

        Returns None when updating an id that no longer exists.
        """
        if train.id is None:
            row = await self.conn.fetchrow(
                f"""
                INSERT INTO trains (train_number, train_name, route)
                VALUES ($1, $2, $3)
                RETURNING {TRAIN_COLUMNS}
                """,
                train.train_number,
                train.train_name,
                train.route,
            )
            logger.info("Created train %s (id=%s)", train.train_number, row["id"])
            return row_to_train(row)

        row = await self.conn.fetchrow(
            f"""
            UPDATE trains
            SET train_number = $2, train_name = $3, route = $4
            WHERE id = $1
            RETURNING {TRAIN_COLUMNS}
            """,
            train.id,
            train.train_number,
            train.train_name,
            train.route,
        )
        if not row:
            logger.warning("Train id=%s not found, nothing updated", train.id)
            return None
        return row_to_train(row)

    async def delete_by_id(self, train_id: int) -> bool:
        # schedules go with it (ON DELETE CASCADE)
        status = await self.conn.execute("DELETE FROM trains WHERE id = $1", train_id)
        deleted = status == "DELETE 1"
        if deleted:
            logger.info("Deleted train id=%s", train_id)
        return deleted
