from datetime import date, time
from typing import List

import asyncpg
from fastapi import APIRouter, Depends, Query

from trainticker.database.db import get_db
from trainticker.models import ScheduleStats, TrainScheduleDTO
from trainticker.repositories import ScheduleRepository, TrainRepository
from trainticker.services.train_service import TrainService

router = APIRouter(prefix="/api/trains", tags=["trains"])


def get_train_service(conn: asyncpg.Connection = Depends(get_db)) -> TrainService:
    return TrainService(ScheduleRepository(conn), TrainRepository(conn))


# fixed paths are registered before /{schedule_date} so they are not parsed as dates


@router.get("", response_model=List[TrainScheduleDTO])
async def get_todays_trains(service: TrainService = Depends(get_train_service)):
    return await service.get_todays_schedule()


@router.get("/upcoming", response_model=List[TrainScheduleDTO])
async def get_upcoming_trains(service: TrainService = Depends(get_train_service)):
    return await service.get_upcoming_departures()


@router.get("/delayed", response_model=List[TrainScheduleDTO])
async def get_delayed_trains(service: TrainService = Depends(get_train_service)):
    return await service.get_delayed_trains()


@router.get("/time-range", response_model=List[TrainScheduleDTO])
async def get_trains_in_time_range(
    start_time: time = Query(..., alias="startTime", description="HH:mm"),
    end_time: time = Query(..., alias="endTime", description="HH:mm"),
    service: TrainService = Depends(get_train_service),
):
    return await service.get_schedules_in_time_range(start_time, end_time)


@router.get("/stats", response_model=ScheduleStats)
async def get_todays_stats(service: TrainService = Depends(get_train_service)):
    return await service.get_todays_stats()


@router.get("/destination/{destination}", response_model=List[TrainScheduleDTO])
async def get_trains_by_destination(
    destination: str,
    service: TrainService = Depends(get_train_service),
):
    return await service.get_schedules_by_destination(destination)


@router.get("/platform/{platform}", response_model=List[TrainScheduleDTO])
async def get_trains_by_platform(
    platform: str,
    service: TrainService = Depends(get_train_service),
):
    return await service.get_schedules_by_platform(platform)


@router.get("/{schedule_date}", response_model=List[TrainScheduleDTO])
async def get_trains_by_date(
    schedule_date: date,
    service: TrainService = Depends(get_train_service),
):
    return await service.get_schedule_by_date(schedule_date)
