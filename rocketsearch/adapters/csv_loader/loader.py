"""CSV loader — reads cities and derives starports for seeding."""

from __future__ import annotations

import csv
import logging
import uuid
from pathlib import Path

from rocketsearch.adapters.csv_loader.normalizer import (
    clean_string,
    normalize_column_name,
    parse_float,
)
from rocketsearch.domain.entities.searchable import SearchableEntity

logger = logging.getLogger(__name__)


def _sniff_dialect(sample: str) -> type[csv.Dialect]:
    """Detect the delimiter (comma/semicolon/tab) from the header line."""
    if not sample:
        return csv.excel

    first_line = sample.splitlines()[0]
    delims = [";", ",", "\t"]
    counts = {d: first_line.count(d) for d in delims}
    best_delim = max(counts, key=counts.get)

    if counts[best_delim] > 0:
        class DynamicDialect(csv.excel):
            delimiter = best_delim
        return DynamicDialect

    return csv.excel


def _read_csv(file_path: Path, encoding: str = "utf-8-sig") -> list[dict[str, str | None]]:
    """Read a CSV file with BOM handling and column normalization.

    Args:
        file_path: path to the CSV file.
        encoding: file encoding (utf-8-sig strips BOM automatically).

    Returns:
        List of dicts with normalized column names.
    """
    with open(file_path, encoding=encoding, newline="") as f:
        sample = f.read(4096)
        f.seek(0)
        reader = csv.DictReader(f, dialect=_sniff_dialect(sample))
        if reader.fieldnames is None:
            raise ValueError(f"CSV file {file_path} has no header row")

        col_map = {col: normalize_column_name(col) for col in reader.fieldnames}
        rows = []
        for raw_row in reader:
            row = {col_map[k]: clean_string(v) for k, v in raw_row.items() if k is not None}
            rows.append(row)

    logger.info("Loaded %d rows from %s (columns: %s)", len(rows), file_path.name, list(col_map.values()))
    return rows


def load_cities(file_path: Path) -> list[SearchableEntity]:
    """Load and normalize the cities CSV.

    Expected columns (after normalization):
        id (optional), name / city, country, latitude / lat, longitude / long / lng / lon

    Rows without a name or with unusable coordinates are skipped.
    """
    rows = _read_csv(file_path)
    cities = []
    for line_no, row in enumerate(rows, start=2):
        name = clean_string(row.get("name") or row.get("city"))
        latitude = parse_float(row.get("latitude") or row.get("lat"))
        longitude = parse_float(
            row.get("longitude") or row.get("long") or row.get("lng") or row.get("lon")
        )
        if not name or latitude is None or longitude is None:
            logger.warning("%s:%d: missing name or coordinates, skipping", file_path.name, line_no)
            continue
        if not (-90.0 <= latitude <= 90.0 and -180.0 <= longitude <= 180.0):
            logger.warning(
                "%s:%d: coordinates out of range (%s, %s), skipping",
                file_path.name, line_no, latitude, longitude,
            )
            continue

        cities.append(
            SearchableEntity(
                id=clean_string(row.get("id")) or uuid.uuid4().hex,
                name=name,
                country=clean_string(row.get("country")) or "",
                latitude=latitude,
                longitude=longitude,
            )
        )
    logger.info("Parsed %d cities", len(cities))
    return cities


def build_starports(cities: list[SearchableEntity], count: int) -> list[SearchableEntity]:
    """Place one starport at each of the first ``count`` cities."""
    return [
        SearchableEntity(
            id=uuid.uuid4().hex,
            name=f"{city.name} Starport",
            latitude=city.latitude,
            longitude=city.longitude,
        )
        for city in cities[:count]
    ]
