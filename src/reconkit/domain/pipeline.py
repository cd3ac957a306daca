"""Re-derivation pipeline from loaded statements to reviewable records."""

from typing import Iterable, Mapping, Optional

from reconkit.domain.entities import (
    Account,
    CsvColumnConfig,
    DraftRecord,
    LedgerEntry,
    RuleSet,
    StatementFile,
    DEBT,
    DEFAULT_CATEGORY,
)
from reconkit.domain.merchant_rules import apply_merchant_rules
from reconkit.domain.row_parser import parse_statement
from reconkit.domain.transfer_matching import match_transfers
from reconkit.utils.date_parser import parse_iso_date
from reconkit.utils.logger import get_logger

log = get_logger("pipeline")


def split_accounts(accounts: Iterable[Account]) -> tuple[list[Account], list[Account]]:
    """Split known accounts into (asset and savings, debt) collections."""
    assets, debts = [], []
    for acc in accounts:
        (debts if acc.kind == DEBT else assets).append(acc)
    return assets, debts


def derive_records(
    files: Iterable[StatementFile],
    configs: Mapping[str, CsvColumnConfig],
    rules: RuleSet,
    accounts: Iterable[Account],
) -> list[DraftRecord]:
    """Build the full reviewable record list from scratch.

    Every file is parsed on its own, the results are concatenated in file
    order, merchant rules run over the concatenation and transfer matching
    runs last so that legs from different files can pair. The same inputs
    always give the same output.

    Args:
        files: Loaded statements
        configs: Column configuration by file name
        rules: Type, merchant and transfer rules
        accounts: Known accounts

    Returns:
        List of draft records
    """
    assets, debts = split_accounts(accounts)
    records: list[DraftRecord] = []
    for statement in files:
        records.extend(
            parse_statement(
                statement.text,
                statement.name,
                rules.type_rules,
                configs.get(statement.name),
                assets,
                debts,
            )
        )
    records = apply_merchant_rules(records, rules.merchant_rules)
    records = match_transfers(records, rules.transfer_rules)
    log.debug(
        "Derived {} records ({} transfer legs)",
        len(records),
        sum(1 for r in records if r.is_transfer),
    )
    return records


def is_committable(record: DraftRecord) -> bool:
    """Return True when a record may be handed to the ledger."""
    return (
        not record.skip
        and not record.is_transfer_mirror
        and not record.account_warning
        and (record.resolved_from_account_id is not None or record.resolved_to_account_id is not None)
    )


def to_ledger_entry(record: DraftRecord, accounts_by_id: Mapping[int, Account]) -> Optional[LedgerEntry]:
    """Convert a committable record into a ledger entry.

    The from-account is the target when set, otherwise the to-account. A
    debt target goes to ``debt_id``. For transfers the to-account is the
    counterparty. Returns None when the date cannot be parsed.
    """
    txn_date = parse_iso_date(record.raw_date)
    if txn_date is None:
        return None

    if record.resolved_from_account_id is not None:
        target = record.resolved_from_account_id
        counterparty = record.resolved_to_account_id
    else:
        target = record.resolved_to_account_id
        counterparty = None

    target_account = accounts_by_id.get(target)
    is_debt = target_account is not None and target_account.kind == DEBT

    return LedgerEntry(
        date=txn_date,
        description=record.resolved_description or record.raw_description,
        amount=record.raw_amount,
        type=record.resolved_type,
        category=record.resolved_category or DEFAULT_CATEGORY,
        account_id=None if is_debt else target,
        debt_id=target if is_debt else None,
        counterparty_account_id=counterparty if counterparty != target else None,
        notes=record.resolved_notes or None,
        source_record_id=record.id,
    )


def build_ledger_entries(
    records: Iterable[DraftRecord], accounts: Iterable[Account]
) -> tuple[list[LedgerEntry], list[str]]:
    """Build ledger entries for every committable record.

    Returns:
        Tuple of (entries, ids of committable records whose date could not
        be parsed)
    """
    accounts_by_id = {acc.id: acc for acc in accounts}
    entries, bad_dates = [], []
    for record in records:
        if not is_committable(record):
            continue
        entry = to_ledger_entry(record, accounts_by_id)
        if entry is None:
            bad_dates.append(record.id)
        else:
            entries.append(entry)
    return entries, bad_dates
