"""Review session state."""

from dataclasses import replace
from typing import Any, Iterable, Optional

from reconkit.domain.bank_format import default_column_config
from reconkit.domain.entities import (
    Account,
    CsvColumnConfig,
    DraftRecord,
    RuleSet,
    StatementFile,
    TRANSACTION_TYPES,
)
from reconkit.domain.errors import (
    NotFoundError,
    ValidationError,
    file_not_loaded,
    invalid_transaction_type,
    record_not_found,
)
from reconkit.domain.pipeline import derive_records, is_committable
from reconkit.domain.row_parser import read_headers

OVERRIDABLE_FIELDS = {
    "skip",
    "resolved_type",
    "resolved_description",
    "resolved_category",
    "resolved_from_account_id",
    "resolved_to_account_id",
    "resolved_notes",
}
ACCOUNT_FIELDS = {"resolved_from_account_id", "resolved_to_account_id"}


class ReviewSession:
    """Authoritative state for one review session.

    Holds the loaded files, their column configurations, the rule sets, the
    known accounts and reviewer overrides. Every mutation re-derives the
    whole record list from those inputs, then re-applies overrides by record
    id.
    """

    def __init__(self, rules: Optional[RuleSet] = None, accounts: Iterable[Account] = ()):
        self.files: list[StatementFile] = []
        self.configs: dict[str, CsvColumnConfig] = {}
        self.rules = rules or RuleSet()
        self.accounts: list[Account] = list(accounts)
        self.overrides: dict[str, dict[str, Any]] = {}
        self.records: list[DraftRecord] = []

    def rederive(self) -> list[DraftRecord]:
        """Recompute the records from the current inputs."""
        records = derive_records(self.files, self.configs, self.rules, self.accounts)
        self.records = [self._with_overrides(r) for r in records]
        return self.records

    def _with_overrides(self, record: DraftRecord) -> DraftRecord:
        patch = self.overrides.get(record.id)
        if not patch:
            return record
        changes = dict(patch)
        if ACCOUNT_FIELDS & changes.keys():
            changes["account_warning"] = None
        return replace(record, **changes)

    def add_files(self, files: Iterable[StatementFile]) -> list[DraftRecord]:
        """Load a batch of files; a file with an already loaded name replaces it."""
        for statement in files:
            self.files = [f for f in self.files if f.name != statement.name]
            self.files.append(statement)
            self.configs[statement.name] = default_column_config(
                statement.name, read_headers(statement.text)
            )
            self._drop_overrides(statement.name)
        return self.rederive()

    def remove_file(self, file_name: str) -> list[DraftRecord]:
        if file_name not in self.configs:
            raise NotFoundError(file_not_loaded(file_name))
        self.files = [f for f in self.files if f.name != file_name]
        del self.configs[file_name]
        self._drop_overrides(file_name)
        return self.rederive()

    def _drop_overrides(self, file_name: str) -> None:
        prefix = f"{file_name}:"
        self.overrides = {k: v for k, v in self.overrides.items() if not k.startswith(prefix)}

    def update_config(self, file_name: str, **changes: Any) -> list[DraftRecord]:
        """Change a file's column configuration.

        Raises:
            NotFoundError: If the file is not loaded
        """
        if file_name not in self.configs:
            raise NotFoundError(file_not_loaded(file_name))
        self.configs[file_name] = replace(self.configs[file_name], **changes)
        return self.rederive()

    def set_rules(self, rules: RuleSet) -> list[DraftRecord]:
        self.rules = rules
        return self.rederive()

    def set_accounts(self, accounts: Iterable[Account]) -> list[DraftRecord]:
        self.accounts = list(accounts)
        return self.rederive()

    def override(self, record_id: str, **changes: Any) -> list[DraftRecord]:
        """Record a reviewer override for one record.

        Raises:
            NotFoundError: If no record has this id
            ValidationError: If a field cannot be overridden or a type is unknown
        """
        if not any(r.id == record_id for r in self.records):
            raise NotFoundError(record_not_found(record_id))
        unknown = set(changes) - OVERRIDABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot override: {', '.join(sorted(unknown))}")
        if "resolved_type" in changes and changes["resolved_type"] not in TRANSACTION_TYPES:
            raise ValidationError(invalid_transaction_type(changes["resolved_type"]))
        self.overrides.setdefault(record_id, {}).update(changes)
        return self.rederive()

    def bulk_set_type(self, bank_code: str, transaction_type: str) -> list[DraftRecord]:
        """Override the type of every record carrying a bank code (case-insensitive)."""
        if transaction_type not in TRANSACTION_TYPES:
            raise ValidationError(invalid_transaction_type(transaction_type))
        code = bank_code.strip().upper()
        for record in self.records:
            if record.raw_type_code.strip().upper() == code:
                self.overrides.setdefault(record.id, {})["resolved_type"] = transaction_type
        return self.rederive()

    def committable(self) -> list[DraftRecord]:
        return [r for r in self.records if is_committable(r)]

    def stats(self) -> dict[str, int]:
        """Return record counts for display."""
        return {
            "total": len(self.records),
            "skipped": sum(1 for r in self.records if r.skip),
            "transfers": sum(1 for r in self.records if r.is_transfer and not r.is_transfer_mirror),
            "warnings": sum(1 for r in self.records if r.account_warning),
            "to_import": len(self.committable()),
        }

    def clear(self) -> None:
        """Forget files, configurations, overrides and records."""
        self.files = []
        self.configs = {}
        self.overrides = {}
        self.records = []
