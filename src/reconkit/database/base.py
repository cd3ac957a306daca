"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from reconkit.domain.entities import (
    Account,
    LedgerEntry,
    MerchantRule,
    Transaction,
    TransferRule,
    TypeMappingRule,
)


class Database(ABC):
    """Abstract database interface: known accounts, rule store and ledger.

    Write operations raise StoreError when the underlying store fails.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(self, name: str, kind: str) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts."""
        pass

    # Rule store operations
    @abstractmethod
    def list_type_rules(self) -> list[TypeMappingRule]:
        """List type mapping rules in creation order."""
        pass

    @abstractmethod
    def replace_type_rules(self, rules: list[TypeMappingRule]) -> list[TypeMappingRule]:
        """Replace all type mapping rules. Returns the stored rules."""
        pass

    @abstractmethod
    def list_merchant_rules(self) -> list[MerchantRule]:
        """List merchant rules by sort order."""
        pass

    @abstractmethod
    def replace_merchant_rules(self, rules: list[MerchantRule]) -> list[MerchantRule]:
        """Replace all merchant rules, storing list position as sort order."""
        pass

    @abstractmethod
    def count_merchant_rules(self) -> int:
        """Count stored merchant rules."""
        pass

    @abstractmethod
    def insert_merchant_rule(self, rule: MerchantRule, sort_order: int) -> int:
        """Insert one merchant rule. Returns the store-assigned ID."""
        pass

    @abstractmethod
    def get_merchant_rule_sort_order(self, rule_id: int) -> Optional[int]:
        """Get the stored sort order of a merchant rule, or None if missing."""
        pass

    @abstractmethod
    def update_merchant_rule(self, rule_id: int, rule: MerchantRule, sort_order: int) -> None:
        """Update one stored merchant rule."""
        pass

    @abstractmethod
    def delete_merchant_rule(self, rule_id: int) -> None:
        """Delete one stored merchant rule."""
        pass

    @abstractmethod
    def list_transfer_rules(self) -> list[TransferRule]:
        """List transfer rules by sort order."""
        pass

    @abstractmethod
    def replace_transfer_rules(self, rules: list[TransferRule]) -> list[TransferRule]:
        """Replace all transfer rules, storing list position as sort order."""
        pass

    # Ledger operations
    @abstractmethod
    def create_transactions(self, entries: list[LedgerEntry]) -> list[int]:
        """Insert ledger entries in one all-or-nothing batch. Returns IDs."""
        pass

    @abstractmethod
    def list_transactions(self, account_id: Optional[int] = None) -> list[Transaction]:
        """List committed transactions, optionally for one account or debt."""
        pass
