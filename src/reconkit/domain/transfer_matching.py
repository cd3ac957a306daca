"""Pairing of outgoing and incoming transfer legs."""

from dataclasses import replace
from decimal import Decimal
from typing import Iterable, Optional

from reconkit.domain.entities import (
    BANK_DISPLAY_NAMES,
    DraftRecord,
    TransferRule,
    TRANSFER,
    TRANSFER_CATEGORY,
)
from reconkit.utils.date_parser import parse_iso_date
from reconkit.utils.logger import get_logger

log = get_logger("transfer_matching")

AMOUNT_TOLERANCE = Decimal("0.02")


def bank_label(record: DraftRecord) -> str:
    """Name the bank a record came from, or its file for generic exports."""
    return BANK_DISPLAY_NAMES.get(record.source_format, record.source_file)


def clear_transfer_fields(record: DraftRecord) -> DraftRecord:
    return replace(record, is_transfer=False, is_transfer_mirror=False, matched_pair_id=None)


def _within_tolerance(debit: DraftRecord, credit: DraftRecord, tolerance_days: int) -> bool:
    if abs(abs(credit.raw_amount) - abs(debit.raw_amount)) >= AMOUNT_TOLERANCE:
        return False
    debit_date = parse_iso_date(debit.raw_date)
    credit_date = parse_iso_date(credit.raw_date)
    if debit_date is None or credit_date is None:
        return False
    return abs((debit_date - credit_date).days) <= tolerance_days


def _other_side(
    preferred: Optional[int],
    fallback: Optional[int],
    own: Optional[int],
    current: Optional[int],
) -> Optional[int]:
    """Pick the counterpart account, never the leg's own account."""
    if preferred is not None:
        return preferred
    if fallback is not None and fallback != own:
        return fallback
    return current


def _find_credit(
    debit: DraftRecord,
    credit_indexes: list[int],
    records: list[DraftRecord],
    tolerance_days: int,
) -> Optional[int]:
    for ci in credit_indexes:
        credit = records[ci]
        if credit.matched_pair_id is not None:
            continue
        if _within_tolerance(debit, credit, tolerance_days):
            return ci
    return None


def match_transfers(
    records: Iterable[DraftRecord], rules: Iterable[TransferRule]
) -> list[DraftRecord]:
    """Pair debit and credit rows into transfers.

    All transfer flags are cleared first, so running this on its own output
    gives the same pairing. Rules run in order against the accumulating
    state; a credit claimed by an earlier pair is never reconsidered. For
    each unmatched debit the first qualifying credit in record order wins.

    The debit becomes the canonical leg. The credit becomes the mirror leg,
    which is never committed.

    Args:
        records: Draft records from every loaded file
        rules: Transfer rules in evaluation order

    Returns:
        New list of records in the original order
    """
    updated = [clear_transfer_fields(r) for r in records]

    for rule in rules:
        from_pattern = rule.from_description_contains.upper()
        to_pattern = rule.to_description_contains.upper()
        if not from_pattern or not to_pattern:
            continue

        debit_indexes = [
            i
            for i, r in enumerate(updated)
            if r.raw_amount < 0 and from_pattern in r.raw_description.upper()
        ]
        credit_indexes = [
            i
            for i, r in enumerate(updated)
            if r.raw_amount > 0 and to_pattern in r.raw_description.upper()
        ]

        for di in debit_indexes:
            debit = updated[di]
            if debit.matched_pair_id is not None:
                continue
            ci = _find_credit(debit, credit_indexes, updated, rule.tolerance_days)
            if ci is None:
                continue
            credit = updated[ci]
            updated[di] = replace(
                debit,
                is_transfer=True,
                matched_pair_id=credit.id,
                resolved_type=TRANSFER,
                resolved_category=TRANSFER_CATEGORY,
                resolved_description=f"Transfer to {bank_label(credit)}",
                resolved_to_account_id=_other_side(
                    credit.resolved_to_account_id,
                    credit.resolved_from_account_id,
                    debit.resolved_from_account_id,
                    debit.resolved_to_account_id,
                ),
            )
            debit = updated[di]
            updated[ci] = replace(
                credit,
                is_transfer=True,
                is_transfer_mirror=True,
                matched_pair_id=debit.id,
                resolved_type=TRANSFER,
                resolved_category=TRANSFER_CATEGORY,
                resolved_description=f"Transfer from {bank_label(debit)}",
                resolved_from_account_id=_other_side(
                    debit.resolved_from_account_id,
                    debit.resolved_to_account_id,
                    credit.resolved_to_account_id,
                    credit.resolved_from_account_id,
                ),
            )
            log.debug("Rule {!r} paired {} with {}", rule.label, debit.id, credit.id)

    return updated
