"""
Record models shared by the ingestor, matcher and report generator.

Standardized Format:
- date: canonical calendar-date key (YYYY-MM-DD, no time component)
- amount: finite, non-negative magnitude (direction lives in kind/flow)
- kind: income or expense (user transactions)
- flow: debit or credit (bank records)

Models are frozen so every reconciliation run works on an immutable
snapshot of its inputs.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

DATE_KEY_PATTERN = r'^\d{4}-\d{2}-\d{2}$'


class Kind(str, Enum):
    """Direction of a user transaction."""
    INCOME = "income"
    EXPENSE = "expense"


class Flow(str, Enum):
    """Direction of a bank record: debit is money out, credit is money in."""
    DEBIT = "debit"
    CREDIT = "credit"


class MismatchReason(str, Enum):
    AMOUNT = "amount mismatch"
    TYPE = "type mismatch"


class UserTransaction(BaseModel):
    """A transaction recorded by the user, supplied by the transaction store."""

    model_config = ConfigDict(frozen=True)

    id: str
    date: str = Field(pattern=DATE_KEY_PATTERN)
    amount: float = Field(ge=0, allow_inf_nan=False)
    category: str = ""
    kind: Kind
    description: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        """Ids are opaque; stores may hand them over as numbers."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class BankRecord(BaseModel):
    """A normalized row from an uploaded bank statement."""

    model_config = ConfigDict(frozen=True)

    date: str = Field(pattern=DATE_KEY_PATTERN)
    description: str = ""
    amount: float = Field(ge=0, allow_inf_nan=False)
    flow: Flow


class MatchedPair(BaseModel):
    model_config = ConfigDict(frozen=True)

    user: UserTransaction
    bank: BankRecord


class Mismatch(BaseModel):
    """A user transaction and a same-day bank record that disagree."""

    model_config = ConfigDict(frozen=True)

    user: UserTransaction
    bank: BankRecord
    reason: MismatchReason


class ReconciliationResult(BaseModel):
    """Outcome of one comparison run.

    Built fresh by every call to compare_transactions and never merged
    with an earlier result.
    """

    model_config = ConfigDict(frozen=True)

    matched: List[MatchedPair] = Field(default_factory=list)
    mismatched: List[Mismatch] = Field(default_factory=list)
    user_only: List[UserTransaction] = Field(default_factory=list)
    bank_only: List[BankRecord] = Field(default_factory=list)

    @property
    def unmatched_count(self) -> int:
        return len(self.user_only) + len(self.bank_only)
