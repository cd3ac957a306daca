"""Ledger commit domain service."""

from typing import Any

from reconkit.database.base import Database
from reconkit.domain.errors import CommitError, StoreError, ValidationError
from reconkit.domain.pipeline import build_ledger_entries
from reconkit.domain.review import ReviewSession
from reconkit.utils.logger import get_logger

log = get_logger("ledger")


class LedgerService:
    """Service for committing reviewed records to the ledger."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def commit(self, session: ReviewSession) -> dict[str, Any]:
        """Commit every committable record of a review session.

        The batch is all-or-nothing. On success the session is cleared; on
        failure it is left untouched so the commit can be retried.

        Args:
            session: Review session to commit

        Returns:
            Dict with commit statistics:
            - committed: number of transactions written
            - ids: ledger transaction IDs
            - excluded: number of records not committed (skipped, mirror
              legs, unresolved accounts)

        Raises:
            ValidationError: If a committable record has an unparseable date
            CommitError: If the ledger write failed
        """
        entries, bad_dates = build_ledger_entries(session.records, session.accounts)
        if bad_dates:
            raise ValidationError(
                f"Cannot commit records with unparseable dates: {', '.join(bad_dates)}"
            )

        try:
            ids = self.db.create_transactions(entries)
        except StoreError as e:
            log.error("Commit of {} transactions failed: {}", len(entries), e)
            raise CommitError(f"Nothing was committed: {e}") from e

        excluded = len(session.records) - len(entries)
        log.info("Committed {} transactions ({} excluded)", len(ids), excluded)
        session.clear()
        return {"committed": len(ids), "ids": ids, "excluded": excluded}
