"""
Bank statement ingestion.

Turns the raw text of an uploaded statement CSV into a list of
BankRecord objects. The layout of the file is inferred from its header:

- Delimiter: semicolon, then tab, then comma (first one present wins)
- Columns: located by synonym containment (English and German headers)
- Amounts: comma decimal separator accepted, sign gives direction when
  there is no type column
- Dates: normalized to YYYY-MM-DD

A header without date, description and amount columns is fatal. Any
individual row that cannot be read is dropped and the import carries on.
"""

import logging
import os
import re

import numpy as np
import pandas as pd

from .config import DEFAULT_CONFIG, REQUIRED_FIELDS
from .dates import normalize_date
from .errors import MissingColumnsError
from .models import BankRecord, Flow

logger = logging.getLogger(__name__)

# Leading numeric prefix of a cell, anything after it is ignored
_NUMBER_PREFIX = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')


def _clean_cell(cell):
    return cell.strip().replace('"', '').strip()


def detect_delimiter(header_line, config=DEFAULT_CONFIG):
    """Pick the delimiter used by a statement from its header line.

    Args:
        header_line (str): First non-empty line of the file
        config (IngestConfig): Inference settings

    Returns:
        str: The configured override, the first candidate found in the
            header, or the default delimiter
    """
    if config.delimiter:
        return config.delimiter
    for candidate in config.delimiter_candidates:
        if candidate in header_line:
            return candidate
    return config.default_delimiter


def locate_columns(headers, config=DEFAULT_CONFIG):
    """Map statement fields to header positions.

    Args:
        headers (list of str): Header cells, already lower-cased and cleaned
        config (IngestConfig): Inference settings

    Returns:
        dict: field name -> column index for every field that was found

    Raises:
        MissingColumnsError: If date, description or amount is not found
    """
    columns = {}
    for field, synonyms in config.column_synonyms:
        for idx, header in enumerate(headers):
            if any(synonym in header for synonym in synonyms):
                columns[field] = idx
                break

    missing = [field for field in REQUIRED_FIELDS if field not in columns]
    if missing:
        raise MissingColumnsError(missing, headers)
    return columns


def parse_amount(value):
    """Parse a statement amount cell into a signed float.

    A comma decimal separator is turned into a period, then the leading
    number in the cell is read.

    Returns:
        float: Parsed amount, NaN if the cell does not start with a number
    """
    if value is None:
        return np.nan
    cleaned = str(value).strip().replace(',', '.', 1)
    match = _NUMBER_PREFIX.match(cleaned)
    if not match:
        return np.nan
    return float(match.group(0))


def is_credit(type_value, config=DEFAULT_CONFIG):
    type_value = type_value.lower()
    return any(keyword.lower() in type_value for keyword in config.credit_keywords)


def _split_rows(lines, delimiter, min_columns):
    """Split data lines into cell lists, dropping blank and short rows."""
    rows = []
    for line in lines:
        if not line.strip():
            continue
        cells = [_clean_cell(cell) for cell in line.split(delimiter)]
        if len(cells) < min_columns:
            logger.debug(f"Skipping short row ({len(cells)} cells): {line}")
            continue
        rows.append(cells)
    return rows


def ingest(raw_text, config=None):
    """Parse a raw bank statement into normalized bank records.

    Args:
        raw_text (str): Full text of the statement file
        config (IngestConfig, optional): Inference settings. Defaults to
            the built-in heuristics.

    Returns:
        list of BankRecord: Valid rows in their original order

    Raises:
        MissingColumnsError: If the header cannot be interpreted
    """
    config = config or DEFAULT_CONFIG

    lines = [line.strip() for line in raw_text.split('\n')]
    lines = [line for line in lines if line]
    if not lines:
        logger.info("Statement is empty")
        return []

    header_line, data_lines = lines[0], lines[1:]
    delimiter = detect_delimiter(header_line, config)
    logger.info(f"Using delimiter {delimiter!r}")

    headers = [_clean_cell(cell).lower() for cell in header_line.split(delimiter)]
    columns = locate_columns(headers, config)
    logger.info(f"Located columns: {columns}")

    min_columns = max(columns.values()) + 1
    rows = _split_rows(data_lines, delimiter, min_columns)
    if not rows:
        logger.info(f"Parsed 0 bank records from {len(data_lines)} data rows")
        return []

    df = pd.DataFrame(rows).iloc[:, :min_columns]

    signed = df[columns['amount']].map(parse_amount).astype(float)
    if 'type' in columns:
        credit = df[columns['type']].map(lambda value: is_credit(value, config))
    else:
        credit = signed > 0
    flows = credit.astype(bool).map({True: Flow.CREDIT, False: Flow.DEBIT})

    dates = df[columns['date']].map(
        lambda value: normalize_date(
            value,
            patterns=config.date_patterns,
            use_general_parser=config.use_general_parser,
        )
    )

    valid = dates.notna() & np.isfinite(signed)
    logger.debug(f"Rows with invalid dates: {int(dates.isna().sum())}")

    records = [
        BankRecord(date=date_key, description=description, amount=float(abs(amount)), flow=flow)
        for date_key, description, amount, flow in zip(
            dates[valid],
            df.loc[valid, columns['description']],
            signed[valid],
            flows[valid],
        )
    ]

    dropped = len(data_lines) - len(records)
    if dropped:
        logger.warning(f"Dropped {dropped} unreadable statement rows")
    logger.info(f"Parsed {len(records)} bank records from {len(data_lines)} data rows")
    return records


def read_statement_file(file_path):
    """Read a statement file fully into memory.

    Args:
        file_path (str or Path): Path to the statement CSV

    Returns:
        str: File contents

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the path is a directory or cannot be decoded
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")
    if os.path.isdir(file_path):
        raise ValueError("Path is a directory")

    encodings = ['utf-8-sig', 'cp1252']
    for encoding in encodings:
        try:
            with open(file_path, 'r', encoding=encoding, newline='') as f:
                text = f.read()
            logger.debug(f"Read {file_path} with encoding: {encoding}")
            return text
        except UnicodeDecodeError:
            continue
    raise ValueError(f"Could not read {file_path} with any supported encoding")
