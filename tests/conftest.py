"""
Shared fixtures: a fixed clock, sample trains/schedules, and in-memory
repositories that follow the same filtering and ordering rules as the SQL
in trainticker.repositories.

Service and API tests only see these in-memory repositories, so BETWEEN
inclusivity, ILIKE matching and DESC ordering are not checked against a real
server here. tests/test_postgres_queries.py covers that when
TRAINTICKER_TEST_DATABASE_URL points at a scratch PostgreSQL database.
"""

import os
from datetime import date, datetime, time

import pytest

# keep config from picking up a developer's .env database
os.environ.setdefault("DATABASE_URL", "")
os.environ.setdefault("CORS_ORIGINS", "http://localhost:3000,http://localhost:8000")

from trainticker.models import Schedule, ScheduleStatus, Train
from trainticker.services.train_service import TrainService

TODAY = date(2026, 10, 17)
TOMORROW = date(2026, 10, 18)
NOW = datetime(2026, 10, 17, 9, 15, 0)


def by_departure(schedules):
    return sorted(schedules, key=lambda s: s.departure_time)


class InMemoryScheduleRepository:
    def __init__(self, schedules):
        self.schedules = list(schedules)
        self.calls = []

    def _on(self, schedule_date):
        return [s for s in self.schedules if s.schedule_date == schedule_date]

    async def find_by_date(self, schedule_date):
        self.calls.append(("find_by_date", schedule_date))
        return by_departure(self._on(schedule_date))

    async def find_by_date_and_status(self, schedule_date, status):
        self.calls.append(("find_by_date_and_status", schedule_date, status))
        return by_departure(s for s in self._on(schedule_date) if s.status == status)

    async def find_upcoming(self, schedule_date, after):
        self.calls.append(("find_upcoming", schedule_date, after))
        return by_departure(s for s in self._on(schedule_date) if s.departure_time >= after)

    async def find_by_date_with_train_info(self, schedule_date):
        self.calls.append(("find_by_date_with_train_info", schedule_date))
        return by_departure(self._on(schedule_date))

    async def find_by_destination_containing(self, destination):
        self.calls.append(("find_by_destination_containing", destination))
        needle = destination.lower()
        return by_departure(s for s in self.schedules if needle in s.destination.lower())

    async def find_by_platform(self, platform):
        self.calls.append(("find_by_platform", platform))
        return by_departure(s for s in self.schedules if s.platform == platform)

    async def find_delayed(self, schedule_date):
        self.calls.append(("find_delayed", schedule_date))
        delayed = [s for s in self._on(schedule_date) if s.status == ScheduleStatus.DELAYED]
        return sorted(delayed, key=lambda s: s.delay_minutes, reverse=True)

    async def find_in_time_range(self, schedule_date, start, end):
        self.calls.append(("find_in_time_range", schedule_date, start, end))
        return by_departure(
            s for s in self._on(schedule_date) if start <= s.departure_time <= end
        )

    async def count_by_date_and_status(self, schedule_date, status):
        self.calls.append(("count_by_date_and_status", schedule_date, status))
        return sum(1 for s in self._on(schedule_date) if s.status == status)


class InMemoryTrainRepository:
    def __init__(self, trains):
        self.trains = list(trains)

    async def find_by_train_number(self, train_number):
        return next((t for t in self.trains if t.train_number == train_number), None)


def make_schedule(train, schedule_id, destination, departure, arrival, platform,
                  status=ScheduleStatus.ON_TIME, delay_minutes=0, schedule_date=TODAY):
    return Schedule(
        id=schedule_id,
        train_id=train.id,
        destination=destination,
        departure_time=departure,
        arrival_time=arrival,
        platform=platform,
        status=status,
        delay_minutes=delay_minutes,
        schedule_date=schedule_date,
        train=train,
    )


@pytest.fixture
def trains():
    return [
        Train(id=1, train_number="T100", train_name="Express", route="New York - Boston"),
        Train(id=2, train_number="T200", train_name="Coastal", route="Washington - New York"),
        Train(id=3, train_number="T300", train_name="Night Owl", route="Chicago - Pittsburgh"),
    ]


@pytest.fixture
def schedules(trains):
    t100, t200, t300 = trains
    return [
        # inserted out of departure order on purpose
        make_schedule(t200, 2, "New York", time(12, 0), time(15, 30), "B2"),
        make_schedule(t100, 1, "Boston", time(8, 0), time(10, 30), "A1",
                      ScheduleStatus.DELAYED, 15),
        make_schedule(t300, 3, "Pittsburgh", time(7, 59), time(14, 0), "C1",
                      ScheduleStatus.CANCELLED, 30),
        make_schedule(t200, 4, "Boston South", time(9, 15), time(11, 0), "A1",
                      ScheduleStatus.DELAYED, 45),
        make_schedule(t100, 5, "Boston", time(12, 1), time(14, 30), "A2"),
        make_schedule(t100, 6, "Boston", time(8, 30), time(11, 0), "A1",
                      ScheduleStatus.ON_TIME, 0, TOMORROW),
    ]


@pytest.fixture
def schedule_repository(schedules):
    return InMemoryScheduleRepository(schedules)


@pytest.fixture
def train_repository(trains):
    return InMemoryTrainRepository(trains)


@pytest.fixture
def service(schedule_repository, train_repository):
    return TrainService(schedule_repository, train_repository, clock=lambda: NOW)
