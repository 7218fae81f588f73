"""
Statement Recon - reconcile recorded household transactions against a bank statement.

This package provides functionality to:
- Ingest bank statement CSV exports (comma, semicolon or tab delimited,
  English or German headers) into normalized bank records
- Normalize heterogeneous date strings to YYYY-MM-DD keys
- Match recorded transactions against bank records into matched,
  mismatched, missing-from-bank and missing-from-records buckets
- Generate a downloadable CSV reconciliation report

The standardized bank record includes:
- date: Date of the transaction (YYYY-MM-DD)
- description: Transaction description
- amount: Non-negative magnitude
- flow: debit (money out) or credit (money in)
"""

from .config import DEFAULT_CONFIG, IngestConfig
from .dates import normalize_date
from .errors import EmptyComparisonInputError, MissingColumnsError, ReconciliationError
from .ingest import ingest, read_statement_file
from .matcher import AMOUNT_TOLERANCE, compare_transactions
from .models import (
    BankRecord,
    Flow,
    Kind,
    MatchedPair,
    Mismatch,
    MismatchReason,
    ReconciliationResult,
    UserTransaction,
)
from .reconcile import reconcile_statement
from .report import REPORT_MIME_TYPE, generate_report, report_filename, save_report
from .store import CsvTransactionStore, TransactionStore

__all__ = [
    'DEFAULT_CONFIG',
    'IngestConfig',
    'normalize_date',
    'EmptyComparisonInputError',
    'MissingColumnsError',
    'ReconciliationError',
    'ingest',
    'read_statement_file',
    'AMOUNT_TOLERANCE',
    'compare_transactions',
    'BankRecord',
    'Flow',
    'Kind',
    'MatchedPair',
    'Mismatch',
    'MismatchReason',
    'ReconciliationResult',
    'UserTransaction',
    'reconcile_statement',
    'REPORT_MIME_TYPE',
    'generate_report',
    'report_filename',
    'save_report',
    'CsvTransactionStore',
    'TransactionStore',
]
