"""
Bank statement reconciliation entry points.

reconcile_statement is the guard callers go through: it refuses to
compare when either side is empty, then runs the matcher. main() wires
file reading, ingestion, matching and the report together for the
command line.
"""

import argparse
import logging

from .config import DEFAULT_CONFIG
from .errors import EmptyComparisonInputError
from .ingest import ingest, read_statement_file
from .matcher import compare_transactions
from .report import format_report_summary, save_report
from .store import CsvTransactionStore
from .utils import ensure_directory, setup_logging

logger = logging.getLogger(__name__)


def reconcile_statement(user_txs, bank_records):
    """Compare user transactions with bank records after checking both exist.

    Args:
        user_txs (sequence of UserTransaction): Recorded transactions
        bank_records (sequence of BankRecord): Ingested statement rows

    Returns:
        ReconciliationResult: Result of the comparison

    Raises:
        EmptyComparisonInputError: If either input is empty
    """
    if not bank_records:
        raise EmptyComparisonInputError("No bank data: please upload a bank statement first")
    if not user_txs:
        raise EmptyComparisonInputError("No transactions: record some transactions before comparing")
    return compare_transactions(user_txs, bank_records)


def summarize(result):
    """One-line outcome message for a comparison."""
    message = (
        f"Found {len(result.matched)} matches, {result.unmatched_count} unmatched, "
        f"and {len(result.mismatched)} mismatched transactions."
    )
    if result.mismatched:
        message += (
            f" {len(result.mismatched)} transactions have mismatches. "
            "Please review the Mismatched Transactions section."
        )
    return message


def build_parser():
    parser = argparse.ArgumentParser(description='Reconcile recorded transactions against a bank statement')
    parser.add_argument('--statement', type=str, required=True,
                        help='Path to the bank statement CSV')
    parser.add_argument('--transactions', type=str, required=True,
                        help='Path to the recorded transactions CSV')
    parser.add_argument('--owner', type=str, default=None,
                        help='Only reconcile transactions belonging to this owner')
    parser.add_argument('--output', type=str, default='output',
                        help='Output directory or report file path')
    parser.add_argument('--delimiter', type=str, default=None,
                        help='Statement delimiter (detected from the header by default)')
    parser.add_argument('--debug', action='store_true',
                        help='Enable debug logging')
    parser.add_argument('--log-level', type=str, default='info',
                        help='Log level when --debug is not given')
    parser.add_argument('--log-file', type=str, default=None,
                        help='Log file path (defaults to $LOG_FILE or debug.log)')
    return parser


def main(argv=None):
    """Main execution function."""
    args = build_parser().parse_args(argv)
    try:
        setup_logging(debug=args.debug, log_level=args.log_level, log_file=args.log_file)
        logger.info("Starting reconciliation process")

        config = DEFAULT_CONFIG
        if args.delimiter:
            config = config.with_delimiter(args.delimiter.replace('\\t', '\t'))

        bank_records = ingest(read_statement_file(args.statement), config)
        logger.info(f"Parsed {len(bank_records)} bank transactions")

        user_txs = CsvTransactionStore(args.transactions).list_transactions(owner=args.owner)

        result = reconcile_statement(user_txs, bank_records)
        logger.info(summarize(result))
        logger.info(f"Reconciliation summary:\n{format_report_summary(result)}")

        output = args.output
        if not output.lower().endswith('.csv'):
            output = ensure_directory(output)
        report_path = save_report(result, output)
        logger.info(f"Report written to {report_path}")
        return 0

    except Exception as e:
        logger.error(f"Error during reconciliation: {str(e)}")
        raise


if __name__ == '__main__':
    raise SystemExit(main())
