"""Seed cities and starports from a CSV file.

Usage:
    python -m rocketsearch.tools.seed_db
    python -m rocketsearch.tools.seed_db --data-dir data --starports 80
    python -m rocketsearch.tools.seed_db --drop  # drop existing data first
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rocketsearch.adapters.csv_loader.loader import build_starports, load_cities
from rocketsearch.adapters.persistence.database import async_session_factory
from rocketsearch.adapters.persistence.models import CityModel, StarportModel
from rocketsearch.config import settings

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)

DEFAULT_STARPORT_COUNT = 80


async def _drop_data(session: AsyncSession) -> None:
    for model in [StarportModel, CityModel]:
        await session.execute(delete(model))
    await session.commit()
    logger.info("Dropped all existing cities and starports")


async def seed(data_dir: Path, starport_count: int = DEFAULT_STARPORT_COUNT, drop: bool = False) -> dict[str, int]:
    """Main seed function. Returns counts of seeded records."""
    counts = {"cities": 0, "starports": 0}

    city_csv = _find_csv(data_dir, ["cities", "city", "worldcities"])
    if not city_csv:
        raise FileNotFoundError(f"No cities CSV found in {data_dir}. Expected something like cities.csv")

    cities = load_cities(city_csv)

    async with async_session_factory() as session:
        if drop:
            await _drop_data(session)

        existing_ids = set((await session.execute(select(CityModel.id))).scalars())
        for city in cities:
            if city.id in existing_ids:
                logger.debug("City '%s' already exists, skipping", city.name)
                continue
            session.add(
                CityModel(
                    id=city.id,
                    name=city.name,
                    country=city.country or "",
                    latitude=city.latitude,
                    longitude=city.longitude,
                )
            )
            existing_ids.add(city.id)
            counts["cities"] += 1
        await session.commit()

        existing_names = set((await session.execute(select(StarportModel.name))).scalars())
        for starport in build_starports(cities, starport_count):
            if starport.name in existing_names:
                logger.debug("Starport '%s' already exists, skipping", starport.name)
                continue
            session.add(
                StarportModel(
                    id=starport.id,
                    name=starport.name,
                    latitude=starport.latitude,
                    longitude=starport.longitude,
                )
            )
            existing_names.add(starport.name)
            counts["starports"] += 1
        await session.commit()

    logger.info("Seed complete: %d cities, %d starports", counts["cities"], counts["starports"])
    return counts


def _find_csv(data_dir: Path, name_hints: list[str]) -> Path | None:
    """Find a CSV file matching any of the name hints."""
    for f in sorted(data_dir.glob("*.csv")):
        fname_lower = f.stem.lower()
        for hint in name_hints:
            if hint in fname_lower:
                logger.info("Found CSV: %s (matched hint '%s')", f.name, hint)
                return f
    return None


async def _verify_data() -> None:
    """Print sanity checks after seeding."""
    async with async_session_factory() as session:
        city_count = (await session.execute(select(func.count(CityModel.id)))).scalar() or 0
        starport_count = (await session.execute(select(func.count(StarportModel.id)))).scalar() or 0

    print(f"\n{'='*50}")
    print("SEED VERIFICATION")
    print(f"{'='*50}")
    print(f"Cities:    {city_count}")
    print(f"Starports: {starport_count}")
    print(f"{'='*50}\n")


def main():
    parser = argparse.ArgumentParser(description="Seed Rocket Rental cities and starports from CSV")
    parser.add_argument(
        "--data-dir", type=str, default=settings.csv_data_path,
        help="Directory containing the cities CSV (default: CSV_DATA_PATH or 'data')",
    )
    parser.add_argument(
        "--starports", type=int, default=DEFAULT_STARPORT_COUNT,
        help=f"Number of starports to derive from the first cities (default: {DEFAULT_STARPORT_COUNT})",
    )
    parser.add_argument(
        "--drop", action="store_true",
        help="Drop existing data before seeding",
    )
    parser.add_argument(
        "--verify-only", action="store_true",
        help="Only run verification, don't seed",
    )
    args = parser.parse_args()

    data_dir = Path(args.data_dir)
    if not args.verify_only and not data_dir.exists():
        logger.error("Data directory not found: %s", data_dir)
        sys.exit(1)

    if args.verify_only:
        asyncio.run(_verify_data())
    else:
        async def run_all():
            await seed(data_dir, starport_count=args.starports, drop=args.drop)
            await _verify_data()
        asyncio.run(run_all())


if __name__ == "__main__":
    main()
