"""Account domain service."""

from typing import Optional
from reconkit.database.base import Database
from reconkit.domain.entities import Account as AccountEntity, ACCOUNT_KINDS
from reconkit.domain.errors import ConflictError, ValidationError, duplicate_account


class AccountService:
    """Service for managing known accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(self, name: str, kind: str = "asset") -> int:
        """Create a new account.

        Args:
            name: Account name, matched case-insensitively against statements
            kind: One of asset, savings, debt

        Returns:
            Account ID

        Raises:
            ValidationError: If the name is blank or the kind is unknown
            ConflictError: If account name already exists
        """
        name = name.strip()
        if not name:
            raise ValidationError("Account name cannot be empty")
        if "#" in name:
            raise ValidationError("Account name cannot contain '#'")
        if kind not in ACCOUNT_KINDS:
            raise ValidationError(
                f"Invalid account kind '{kind}'. Must be one of: {', '.join(ACCOUNT_KINDS)}"
            )

        for acc in self.db.list_accounts():
            if acc.name.lower() == name.lower():
                raise ConflictError(duplicate_account(name))

        return self.db.create_account(name=name, kind=kind)

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts.

        Returns:
            List of account entities
        """
        return self.db.list_accounts()
