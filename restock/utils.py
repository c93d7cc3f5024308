import logging
import math
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Optional, Union

import pandas as pd

logger = logging.getLogger(__name__)

MISSING_DATE = "—"
SHORT_MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

DateLike = Union[date, datetime, str, None]


def get_date_suffix_for_filename(today: Optional[date] = None) -> str:
    """Returns the date as a YYYY-MM-DD string for filenames."""
    return (today or date.today()).strftime("%Y-%m-%d")


def add_whole_days(start: date, days: float) -> Optional[date]:
    """
    Moves `start` forward by the whole part of `days`.
    Returns None when `days` is not finite or the result falls outside the calendar.
    """
    if not math.isfinite(days):
        return None
    whole_days = math.floor(days)
    if whole_days > (date.max - start).days or whole_days < (date.min - start).days:
        return None
    return start + timedelta(days=whole_days)


def _to_date(value: DateLike) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value)).date()
    except ValueError:
        return None


def days_until_date(target: DateLike, today: date) -> Optional[int]:
    """Whole calendar days from `today` to `target`; negative when the date has passed."""
    target_date = _to_date(target)
    if target_date is None:
        return None
    return (target_date - today).days


def format_date(value: DateLike) -> str:
    """Formats a date as dd/mm/yyyy, or a dash when there is nothing to show."""
    value = _to_date(value)
    if value is None:
        return MISSING_DATE
    return value.strftime("%d/%m/%Y")


def format_date_short(value: DateLike) -> str:
    """Formats a date as 'dd Mon', e.g. '07 Oct'."""
    value = _to_date(value)
    if value is None:
        return MISSING_DATE
    return f"{value.day:02d} {SHORT_MONTHS[value.month - 1]}"


def load_csv(file_path: Path, skiprows: int = 0, dtype: Optional[dict] = None) -> pd.DataFrame | None:
    """
    A robust CSV loader with an encoding fallback.
    It will attempt to read a file in the following order:
    1. UTF-8 with BOM support ('utf-8-sig').
    2. Latin-1, which can read any byte but might misinterpret characters.
    """
    try:
        return pd.read_csv(file_path, encoding="utf-8-sig", skiprows=skiprows, dtype=dtype)

    except UnicodeDecodeError:
        logger.info(f"UTF-8 decoding failed for {file_path.name}. Retrying with 'latin-1'.")
        try:
            return pd.read_csv(file_path, encoding="latin-1", skiprows=skiprows, dtype=dtype)
        except Exception as e_latin1:
            logger.error(f"Could not read {file_path.name} even with latin-1. Reason: {e_latin1}")
            return None

    except FileNotFoundError:
        logger.info(f"File not found at {file_path}, skipping.")
        return None

    except pd.errors.EmptyDataError:
        logger.warning(f"{file_path.name} is empty.")
        return None

    except Exception as e_general:
        logger.error(
            f"An unexpected error occurred while reading {file_path.name}. Reason: {e_general}"
        )
        return None
