import csv
import io
from datetime import date

import pytest

from statement_recon.errors import EmptyComparisonInputError, MissingColumnsError
from statement_recon.matcher import compare_transactions
from statement_recon.reconcile import main, reconcile_statement, summarize


class TestReconcileStatement:
    """Test suite for the comparison guard"""

    def test_refuses_without_bank_records(self, make_user_tx):
        with pytest.raises(EmptyComparisonInputError, match='No bank data'):
            reconcile_statement([make_user_tx()], [])

    def test_refuses_without_user_transactions(self, make_bank_record):
        with pytest.raises(EmptyComparisonInputError, match='No transactions'):
            reconcile_statement([], [make_bank_record()])

    def test_guard_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            reconcile_statement([], [])

    def test_delegates_to_matcher(self, make_user_tx, make_bank_record):
        user_txs = [make_user_tx()]
        bank_records = [make_bank_record()]
        assert reconcile_statement(user_txs, bank_records) == compare_transactions(user_txs, bank_records)


class TestSummarize:

    def test_counts(self, make_user_tx, make_bank_record):
        result = compare_transactions(
            [make_user_tx(), make_user_tx(date='2024-01-09')],
            [make_bank_record(), make_bank_record(date='2024-01-10')],
        )
        assert summarize(result) == 'Found 1 matches, 2 unmatched, and 0 mismatched transactions.'

    def test_mismatch_notice(self, make_user_tx, make_bank_record):
        result = compare_transactions([make_user_tx(amount=1.0)], [make_bank_record(amount=2.0)])
        assert 'Please review the Mismatched Transactions section.' in summarize(result)


class TestCommandLine:
    """End-to-end runs of the command line"""

    @pytest.fixture(autouse=True)
    def log_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv('LOG_FILE', str(tmp_path / 'logs' / 'recon.log'))

    def read_summary(self, path):
        block = path.read_text(encoding='utf-8').split('\n\n')[1]
        rows = list(csv.reader(io.StringIO(block)))
        return {row[0]: row[1] for row in rows[2:]}

    def test_full_run(self, tmp_path, statement_csv, transactions_csv):
        output = tmp_path / 'out'
        exit_code = main([
            '--statement', str(statement_csv),
            '--transactions', str(transactions_csv),
            '--output', str(output),
        ])

        assert exit_code == 0
        report = output / f"bank-comparison-report-{date.today().isoformat()}.csv"
        assert report.exists()
        assert self.read_summary(report) == {
            'Matched': '1',
            'Missing from Bank': '2',
            'Missing from Records': '0',
            'Mismatched': '1',
        }

    def test_owner_filter_and_report_file(self, tmp_path, statement_csv, transactions_csv):
        report = tmp_path / 'alice.csv'
        main([
            '--statement', str(statement_csv),
            '--transactions', str(transactions_csv),
            '--owner', 'alice',
            '--output', str(report),
        ])
        assert self.read_summary(report)['Missing from Bank'] == '1'

    def test_delimiter_option(self, tmp_path, transactions_csv):
        statement = tmp_path / 'tabbed.csv'
        statement.write_text('Date\tDescription\tAmount\n2024-01-05\tGrocery Store\t-50.00\n', encoding='utf-8')
        report = tmp_path / 'report.csv'
        main([
            '--statement', str(statement),
            '--transactions', str(transactions_csv),
            '--delimiter', '\\t',
            '--output', str(report),
        ])
        assert self.read_summary(report)['Matched'] == '1'

    def test_bad_header_raises(self, tmp_path, transactions_csv):
        statement = tmp_path / 'bad.csv'
        statement.write_text('When,What,HowMuch\n2024-01-05,x,1\n', encoding='utf-8')
        with pytest.raises(MissingColumnsError):
            main(['--statement', str(statement), '--transactions', str(transactions_csv),
                  '--output', str(tmp_path / 'out')])

    def test_no_transactions_for_owner(self, tmp_path, statement_csv, transactions_csv):
        with pytest.raises(EmptyComparisonInputError):
            main(['--statement', str(statement_csv), '--transactions', str(transactions_csv),
                  '--owner', 'carol', '--output', str(tmp_path / 'out')])

    def test_log_file_option(self, tmp_path, statement_csv, transactions_csv):
        log_file = tmp_path / 'custom' / 'run.log'
        main(['--statement', str(statement_csv), '--transactions', str(transactions_csv),
              '--output', str(tmp_path / 'out'), '--log-file', str(log_file)])
        assert log_file.exists()
