"""
Load sample trains and a day of schedules for the departure board.

  python scripts/seed_schedules.py              # today
  python scripts/seed_schedules.py 2026-10-18   # a given date
"""
import asyncio
import sys
from datetime import date, time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from trainticker.database.db import close_pool, get_pool
from trainticker.models import ScheduleStatus, Train
from trainticker.repositories import TrainRepository

TRAINS = [
    ("T100", "Express", "New York - Boston"),
    ("T200", "Coastal", "Washington - New York"),
    ("T300", "Night Owl", "Chicago - Pittsburgh"),
    ("T400", "Lakeshore", "Albany - Chicago"),
    ("T500", "Keystone", "Philadelphia - Harrisburg"),
]

# (train_number, destination, departure, arrival, platform, status, delay_minutes)
SCHEDULES = [
    ("T100", "Boston", time(8, 0), time(10, 30), "A1", ScheduleStatus.DELAYED, 15),
    ("T200", "New York", time(9, 15), time(12, 45), "B2", ScheduleStatus.ON_TIME, 0),
    ("T400", "Chicago", time(11, 0), time(19, 30), "C1", ScheduleStatus.ON_TIME, 0),
    ("T500", "Harrisburg", time(13, 40), time(15, 25), "A2", ScheduleStatus.CANCELLED, 0),
    ("T100", "Boston", time(16, 0), time(18, 30), "A1", ScheduleStatus.ON_TIME, 0),
    ("T200", "New York", time(17, 20), time(20, 50), "B1", ScheduleStatus.DELAYED, 5),
    ("T300", "Pittsburgh", time(22, 45), time(6, 10), "C2", ScheduleStatus.DELAYED, 40),
]


async def seed(schedule_date: date):
    pool = await get_pool()
    async with pool.acquire() as conn:
        async with conn.transaction():
            trains = TrainRepository(conn)
            ids = {}
            for number, name, route in TRAINS:
                train = await trains.find_by_train_number(number)
                if train is None:
                    train = await trains.save(
                        Train(train_number=number, train_name=name, route=route)
                    )
                ids[number] = train.id

            await conn.execute(
                "DELETE FROM schedules WHERE schedule_date = $1", schedule_date
            )
            for number, destination, dep, arr, platform, status, delay in SCHEDULES:
                await conn.execute(
                    """
                    INSERT INTO schedules (train_id, destination, departure_time, arrival_time,
                                           platform, status, delay_minutes, schedule_date)
                    VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
                    """,
                    ids[number], destination, dep, arr, platform, status.value, delay, schedule_date,
                )

    await close_pool()
    print(f"Seeded {len(TRAINS)} trains and {len(SCHEDULES)} schedules for {schedule_date}")


if __name__ == "__main__":
    target = date.fromisoformat(sys.argv[1]) if len(sys.argv) > 1 else date.today()
    asyncio.run(seed(target))
