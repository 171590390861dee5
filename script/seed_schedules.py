#!/usr/bin/env python3
"""
Schedule Seed Script
Populate sample trains and schedules into the database

Features:
1. Create Trains - 5 sample trains from seed_config.json
2. Create Schedules - 10 trips dated relative to today (day_offset)

Notes:
- Goes through the same admin use cases as POST /api/admin/train and /schedule
- Skips seeding when the catalog already holds schedules (use --reset to start over)
"""

import argparse
import asyncio
from datetime import date, time, timedelta
from decimal import Decimal
import json

from src.platform.config.di import container
from src.platform.constant.path import SEED_DATA_DIR
from src.service.train_booking.app.command.create_schedule_use_case import (
    CreateScheduleUseCase,
    CreateTrainUseCase,
)
from src.service.train_booking.domain.enum.train_type import TrainType


CONFIG_FILE = SEED_DATA_DIR / 'seed_config.json'


def _load_seed_config() -> dict:
    with open(CONFIG_FILE, 'r') as f:
        return json.load(f)


async def create_trains(trains: list[dict]) -> dict[str, int]:
    """Create trains, returns train_number → id"""
    print(f'🚆 Creating {len(trains)} trains...')
    train_ids: dict[str, int] = {}
    for config in trains:
        use_case = CreateTrainUseCase(uow=container.unit_of_work())
        train = await use_case.execute(
            train_number=config['train_number'],
            train_name=config['train_name'],
            train_type=TrainType(config['train_type']),
            total_seats=config['total_seats'],
        )
        assert train.id is not None
        train_ids[train.train_number] = train.id
        print(f'   ✅ {train.train_number} {train.train_name}: ID={train.id}, seats={train.total_seats}')
    return train_ids


async def create_schedules(schedules: list[dict], train_ids: dict[str, int]) -> int:
    print(f'🗓️  Creating {len(schedules)} schedules...')
    today = date.today()
    for config in schedules:
        use_case = CreateScheduleUseCase(uow=container.unit_of_work())
        trip = await use_case.execute(
            train_id=train_ids[config['train_number']],
            departure_station=config['departure_station'],
            arrival_station=config['arrival_station'],
            departure_date=today + timedelta(days=config['day_offset']),
            departure_time=time.fromisoformat(config['departure_time']),
            arrival_time=time.fromisoformat(config['arrival_time']),
            fare=Decimal(config['fare']),
        )
        print(
            f'   ✅ ID={trip.schedule_id} {trip.train_number} '
            f'{trip.departure_station} → {trip.arrival_station} '
            f'{trip.departure_date} {trip.departure_time}'
        )
    return len(schedules)


async def main(*, reset: bool) -> None:
    print('🌱 Starting schedule seeding...')
    print('=' * 50)
    database = container.database()
    try:
        if reset:
            await database.drop_tables()
            print('🧹 Dropped existing tables')
        await database.create_tables()

        if await container.schedule_catalog().find_all():
            print('ℹ️  Catalog already holds schedules, skipping (use --reset to reseed)')
            return

        seed_config = _load_seed_config()
        train_ids = await create_trains(seed_config['trains'])
        print()
        count = await create_schedules(seed_config['schedules'], train_ids)
        print()
        print('=' * 50)
        print(f'🌱 Seeded {len(train_ids)} trains and {count} schedules')
    finally:
        await database.dispose()


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Seed sample trains and schedules')
    parser.add_argument('--reset', action='store_true', help='drop and recreate tables first')
    args = parser.parse_args()
    asyncio.run(main(reset=args.reset))
