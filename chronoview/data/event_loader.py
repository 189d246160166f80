"""
Event Loader - Event records and dataset loading for the timeline.

This module provides:
- The immutable Event record displayed on the timeline
- Validation of raw dataset entries (drop or clamp malformed values)
- Loading of the JSON dataset file
"""

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional

from chronoview.utils.error_handler import create_load_error_with_guidance

logger = logging.getLogger(__name__)

MIN_SIGNIFICANCE = 1
MAX_SIGNIFICANCE = 5
DEFAULT_CATEGORY = 'uncategorized'


@dataclass(frozen=True)
class Event:
    """
    A single dated event.

    Events are created once at startup and never mutated. The constructor
    rejects values that would make layout non-deterministic (non-integer
    years, significance outside 1-5).
    """
    year: int
    title: str
    description: str = ''
    significance: int = MIN_SIGNIFICANCE
    category: str = DEFAULT_CATEGORY

    def __post_init__(self):
        if isinstance(self.year, bool) or not isinstance(self.year, int):
            raise ValueError(f"Event year must be an integer, got {self.year!r}")
        if not isinstance(self.title, str):
            raise ValueError(f"Event title must be a string, got {self.title!r}")
        if isinstance(self.significance, bool) or not isinstance(self.significance, int):
            raise ValueError(f"Event significance must be an integer, got {self.significance!r}")
        if not MIN_SIGNIFICANCE <= self.significance <= MAX_SIGNIFICANCE:
            raise ValueError(
                f"Event significance must be between {MIN_SIGNIFICANCE} and "
                f"{MAX_SIGNIFICANCE}, got {self.significance}"
            )


def _coerce_year(value: Any) -> Optional[int]:
    """Return the year as an int, or None when it cannot be used."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return None


def _coerce_significance(value: Any) -> Optional[int]:
    """Return significance rounded and clamped to 1-5, or None if not numeric."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return max(MIN_SIGNIFICANCE, min(MAX_SIGNIFICANCE, int(round(value))))


def parse_events(records: Iterable[Any]) -> List[Event]:
    """
    Convert raw dataset records into Event objects.

    Dataset order is preserved; it drives hit-test tie-breaking.

    - Entries that are not objects, have no usable year (missing,
      non-integral, non-finite) or no string title are dropped.
    - Significance outside 1-5 is clamped; non-numeric significance drops
      the entry.

    Args:
        records: Iterable of dicts with year/title/description/significance/category

    Returns:
        list: Valid Event objects in dataset order
    """
    events = []
    skipped_count = 0
    clamped_count = 0

    for record in records:
        if not isinstance(record, dict):
            skipped_count += 1
            continue

        year = _coerce_year(record.get('year'))
        title = record.get('title')
        if year is None or not isinstance(title, str):
            skipped_count += 1
            continue

        raw_significance = record.get('significance', MIN_SIGNIFICANCE)
        significance = _coerce_significance(raw_significance)
        if significance is None:
            skipped_count += 1
            continue
        if significance != raw_significance:
            clamped_count += 1

        category = record.get('category')
        if category is None:
            category = DEFAULT_CATEGORY

        events.append(Event(
            year=year,
            title=title,
            description=str(record.get('description') or ''),
            significance=significance,
            category=str(category)
        ))

    if skipped_count > 0:
        logger.warning(f"Skipped {skipped_count} invalid events (missing title or unusable year/significance)")
    if clamped_count > 0:
        logger.warning(f"Clamped significance of {clamped_count} events into {MIN_SIGNIFICANCE}-{MAX_SIGNIFICANCE}")

    return events


def load_events(path) -> List[Event]:
    """
    Load the event dataset from a JSON file.

    The file holds either a list of event objects or an object with an
    ``events`` list.

    Args:
        path: Path to the JSON dataset

    Returns:
        list: Event objects in file order

    Raises:
        DataLoadError: If the file cannot be read or parsed
    """
    path = str(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise create_load_error_with_guidance(path, e) from e

    if isinstance(data, dict):
        data = data.get('events', [])
    if not isinstance(data, list):
        raise create_load_error_with_guidance(
            path, ValueError("dataset root must be a list of events")
        )

    events = parse_events(data)
    logger.info(f"Loaded {len(events)} events from {path}")
    return events
