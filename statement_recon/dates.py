"""
Date normalization for bank statement rows.

Every date is reduced to a canonical YYYY-MM-DD key, which is the only
thing the matcher compares.
"""

import logging
import re
import warnings
from datetime import date

import pandas as pd

from .config import DATE_PATTERNS

logger = logging.getLogger(__name__)

# Relative words pandas resolves against the clock; never a statement date
RELATIVE_DATE_WORDS = {'now', 'today', 'tomorrow', 'yesterday'}


def _parse_general(date_str):
    """Parse with the general-purpose pandas parser, None when it gives up."""
    if date_str.lower() in RELATIVE_DATE_WORDS:
        return None
    try:
        # Day-first fallbacks in pandas warn once per cell
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', UserWarning)
            ts = pd.to_datetime(date_str, errors='coerce')
    except (ValueError, TypeError, OverflowError):
        return None
    if ts is None or pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_convert('UTC')
    return ts.strftime('%Y-%m-%d')


def _parse_pattern(date_str, pattern):
    match = re.match(pattern, date_str)
    if not match:
        return None
    day, month, year = (int(match.group(g)) for g in ('day', 'month', 'year'))
    try:
        date(year, month, day)
    except ValueError:
        return None
    return f"{year:04d}-{month:02d}-{day:02d}"


def normalize_date(date_str, patterns=None, use_general_parser=True):
    """
    Convert a raw statement date to a canonical YYYY-MM-DD key.

    Attempts, first success wins:
    1. the general-purpose parser (ISO, US month-first, textual months, ...)
    2. each day-first pattern in ``patterns`` (D.M.YYYY, then D-M-YYYY)

    Args:
        date_str (str): Raw date cell
        patterns (sequence of str, optional): Regexes with day/month/year
            groups. Defaults to the built-in day-first patterns.
        use_general_parser (bool): Try the general parser first.

    Returns:
        str or None: Canonical date key, or None if the value is not a date
    """
    if date_str is None or not isinstance(date_str, str):
        return None

    date_str = date_str.strip().strip('"\'')
    if not date_str:
        return None

    if use_general_parser:
        result = _parse_general(date_str)
        if result is not None:
            return result

    for pattern in patterns if patterns is not None else DATE_PATTERNS:
        result = _parse_pattern(date_str, pattern)
        if result is not None:
            logger.debug(f"Converted {date_str} to {result} using pattern {pattern}")
            return result

    logger.debug(f"Could not normalize date: {date_str}")
    return None
