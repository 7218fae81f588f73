"""
Sources of user transactions.

The reconciliation engine never owns user transactions; it reads them
from a store. TransactionStore is the interface a real backend (REST
API, database) implements. CsvTransactionStore reads an exported file
and is what the command line uses.
"""

import logging
import pathlib
from abc import ABC, abstractmethod

import pandas as pd
from pydantic import ValidationError

from .dates import normalize_date
from .models import UserTransaction

logger = logging.getLogger(__name__)

TRANSACTION_COLUMNS = ['id', 'date', 'amount', 'category', 'kind', 'description']


class TransactionStore(ABC):
    """Read access to the transactions a user has recorded."""

    @abstractmethod
    def list_transactions(self, owner=None):
        """
        Return the user's transactions.

        Args:
            owner: Owner identifier; None means every transaction the
                store can see

        Returns:
            list of UserTransaction: Transactions with canonical date keys
        """


class CsvTransactionStore(TransactionStore):
    """Transactions exported to a CSV file.

    Expected columns: id, date, amount, category, kind, description.
    An optional owner column lets one export hold several users.
    """

    def __init__(self, file_path):
        self.file_path = pathlib.Path(file_path)

    def _read(self):
        if not self.file_path.exists():
            raise FileNotFoundError(f"File not found: {self.file_path}")
        df = pd.read_csv(
            self.file_path,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
            encoding='utf-8-sig',
        )
        df.columns = df.columns.str.strip().str.lower()
        missing_columns = [col for col in ['id', 'date', 'amount', 'kind'] if col not in df.columns]
        if missing_columns:
            raise ValueError(f"Missing required columns: {missing_columns}")
        for col in ['category', 'description']:
            if col not in df.columns:
                df[col] = ''
        return df

    def list_transactions(self, owner=None):
        df = self._read()
        if owner is not None and 'owner' in df.columns:
            df = df[df['owner'] == str(owner)]

        transactions = []
        # Header is line 1 of the file
        for line_no, row in zip(df.index + 2, df[TRANSACTION_COLUMNS].itertuples(index=False)):
            date_key = normalize_date(row.date)
            if date_key is None:
                raise ValueError(f"Invalid date on line {line_no}: {row.date}")
            try:
                amount = pd.to_numeric(row.amount.strip(), errors='raise')
            except (ValueError, TypeError) as e:
                raise ValueError(f"Invalid amount on line {line_no}: {row.amount}") from e
            try:
                tx = UserTransaction(
                    id=row.id,
                    date=date_key,
                    amount=abs(float(amount)),
                    category=row.category,
                    kind=row.kind.strip().lower(),
                    description=row.description,
                )
            except ValidationError as e:
                raise ValueError(f"Invalid transaction on line {line_no}: {e}") from e
            transactions.append(tx)

        logger.info(f"Loaded {len(transactions)} user transactions from {self.file_path}")
        return transactions
