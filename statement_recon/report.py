"""
Reconciliation report generation.

The report is a single CSV document with sections in a fixed order:
- Summary: counts per bucket (always present)
- Mismatched Transactions
- Missing from Bank (Your Records Only)
- Missing from Records (Bank Records Only)

Empty sections are left out entirely. Money is always rendered with two
decimals and text cells are quoted, embedded quotes doubled.
"""

import csv
import logging
import pathlib
from datetime import date

import pandas as pd

logger = logging.getLogger(__name__)

REPORT_MIME_TYPE = 'text/csv'
REPORT_TITLE = 'Comparison Report'

MISMATCH_COLUMNS = [
    'Reason', 'Date', 'Your Description', 'Your Category', 'Your Amount',
    'Your Type', 'Bank Description', 'Bank Amount', 'Bank Type',
]
USER_ONLY_COLUMNS = ['Date', 'Description', 'Category', 'Amount', 'Type']
BANK_ONLY_COLUMNS = ['Date', 'Description', 'Amount', 'Type']


def format_money(amount):
    return f"{amount:.2f}"


def report_filename(today=None):
    """Suggested download name, e.g. bank-comparison-report-2025-03-17.csv."""
    today = today or date.today()
    return f"bank-comparison-report-{today.strftime('%Y-%m-%d')}.csv"


def _render_section(title, df):
    body = df.to_csv(index=False, quoting=csv.QUOTE_NONNUMERIC, lineterminator='\n')
    return f"{title}\n{body}\n"


def _summary_frame(result):
    return pd.DataFrame({
        'Metric': ['Matched', 'Missing from Bank', 'Missing from Records', 'Mismatched'],
        'Count': [
            len(result.matched),
            len(result.user_only),
            len(result.bank_only),
            len(result.mismatched),
        ],
    })


def _mismatch_frame(result):
    rows = [
        [
            m.reason.value,
            m.user.date,
            m.user.description,
            m.user.category,
            format_money(m.user.amount),
            m.user.kind.value,
            m.bank.description,
            format_money(m.bank.amount),
            m.bank.flow.value,
        ]
        for m in result.mismatched
    ]
    return pd.DataFrame(rows, columns=MISMATCH_COLUMNS)


def _user_only_frame(result):
    rows = [
        [tx.date, tx.description, tx.category, format_money(tx.amount), tx.kind.value]
        for tx in result.user_only
    ]
    return pd.DataFrame(rows, columns=USER_ONLY_COLUMNS)


def _bank_only_frame(result):
    rows = [
        [rec.date, rec.description, format_money(rec.amount), rec.flow.value]
        for rec in result.bank_only
    ]
    return pd.DataFrame(rows, columns=BANK_ONLY_COLUMNS)


def generate_report(result):
    """Render a reconciliation result as CSV text.

    Args:
        result (ReconciliationResult): Output of compare_transactions

    Returns:
        str: Report contents
    """
    sections = [f"{REPORT_TITLE}\n\n", _render_section('Summary', _summary_frame(result))]

    if result.mismatched:
        sections.append(_render_section('Mismatched Transactions', _mismatch_frame(result)))
    if result.user_only:
        sections.append(_render_section('Missing from Bank (Your Records Only)', _user_only_frame(result)))
    if result.bank_only:
        sections.append(_render_section('Missing from Records (Bank Records Only)', _bank_only_frame(result)))

    return ''.join(sections)


def format_report_summary(result):
    """Format a human-readable summary of reconciliation results.

    Args:
        result (ReconciliationResult): Output of compare_transactions

    Returns:
        str: Formatted summary text
    """
    matched_amount = sum(pair.user.amount for pair in result.matched)
    user_only_amount = sum(tx.amount for tx in result.user_only)
    bank_only_amount = sum(rec.amount for rec in result.bank_only)

    summary = [
        f"Matched Transactions: {len(result.matched)}",
        f"Mismatched Transactions: {len(result.mismatched)}",
        f"Missing from Bank: {len(result.user_only)}",
        f"Missing from Records: {len(result.bank_only)}",
        f"Matched Amount: ${matched_amount:.2f}",
        f"Missing from Bank Amount: ${user_only_amount:.2f}",
        f"Missing from Records Amount: ${bank_only_amount:.2f}",
    ]
    return "\n".join(summary)


def save_report(result, output_path, today=None):
    """Write the reconciliation report to disk.

    Args:
        result (ReconciliationResult): Output of compare_transactions
        output_path (str or pathlib.Path): Output directory or file path
        today (datetime.date, optional): Date used in the default file name

    Returns:
        pathlib.Path: Path of the written report
    """
    output_path = pathlib.Path(output_path)
    # If path is a directory, append the report filename
    if output_path.is_dir() or not output_path.suffix:
        output_path = output_path / report_filename(today)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    logger.debug(f"Writing reconciliation report to {output_path}")
    with open(output_path, 'w', encoding='utf-8', newline='') as f:
        f.write(generate_report(result))
    return output_path
