"""
Three-way reconciliation of user transactions against bank records.

Matching Rules:
- Exact match: same date key, amounts within AMOUNT_TOLERANCE, and the
  directions agree (income <-> credit, expense <-> debit)
- Mismatch: same date key but the amount or the direction disagrees
- Everything left over is reported as user-only or bank-only

User transactions are processed once, in order, each taking the first
bank record still available. A bank record consumed by an earlier user
transaction is never reconsidered.
"""

import logging

from .models import (
    Flow,
    Kind,
    MatchedPair,
    Mismatch,
    MismatchReason,
    ReconciliationResult,
)

logger = logging.getLogger(__name__)

# Absolute tolerance in currency units; sub-cent differences are float noise
AMOUNT_TOLERANCE = 0.01


def amounts_agree(user_amount, bank_amount):
    return abs(user_amount - bank_amount) < AMOUNT_TOLERANCE


def directions_agree(kind, flow):
    """Check that a user transaction kind and a bank flow point the same way."""
    return (
        (kind == Kind.INCOME and flow == Flow.CREDIT)
        or (kind == Kind.EXPENSE and flow == Flow.DEBIT)
    )


def _is_exact_match(user_tx, bank_rec):
    return (
        amounts_agree(user_tx.amount, bank_rec.amount)
        and user_tx.date == bank_rec.date
        and directions_agree(user_tx.kind, bank_rec.flow)
    )


def _is_mismatch(user_tx, bank_rec):
    return user_tx.date == bank_rec.date and (
        not amounts_agree(user_tx.amount, bank_rec.amount)
        or not directions_agree(user_tx.kind, bank_rec.flow)
    )


def _take_first(pool, bank_records, predicate):
    """Remove and return the position of the first pooled record matching predicate."""
    for pos, bank_idx in enumerate(pool):
        if predicate(bank_records[bank_idx]):
            del pool[pos]
            return bank_idx
    return None


def compare_transactions(user_txs, bank_records):
    """Reconcile user transactions against bank records.

    Args:
        user_txs (sequence of UserTransaction): Transactions recorded by the user
        bank_records (sequence of BankRecord): Records from the bank statement

    Returns:
        ReconciliationResult: Matched pairs, mismatches and both orphan lists.
            Orphans keep their input order.
    """
    user_txs = list(user_txs)
    bank_records = list(bank_records)

    # Bank records are tracked by position so identical rows stay distinct
    pool = list(range(len(bank_records)))
    matched = []
    mismatched = []
    user_only = []

    for user_tx in user_txs:
        bank_idx = _take_first(pool, bank_records, lambda b: _is_exact_match(user_tx, b))
        if bank_idx is not None:
            matched.append(MatchedPair(user=user_tx, bank=bank_records[bank_idx]))
            continue

        bank_idx = _take_first(pool, bank_records, lambda b: _is_mismatch(user_tx, b))
        if bank_idx is not None:
            bank_rec = bank_records[bank_idx]
            if not amounts_agree(user_tx.amount, bank_rec.amount):
                reason = MismatchReason.AMOUNT
            else:
                reason = MismatchReason.TYPE
            logger.debug(f"Mismatch on {user_tx.date} for {user_tx.id}: {reason.value}")
            mismatched.append(Mismatch(user=user_tx, bank=bank_rec, reason=reason))
            continue

        user_only.append(user_tx)

    result = ReconciliationResult(
        matched=matched,
        mismatched=mismatched,
        user_only=user_only,
        bank_only=[bank_records[idx] for idx in pool],
    )
    logger.info(
        f"Found {len(result.matched)} matches, {result.unmatched_count} unmatched, "
        f"and {len(result.mismatched)} mismatched transactions"
    )
    return result
