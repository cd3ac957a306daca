"""Domain layer for reconkit application."""

__all__ = [
    "AccountService",
    "LedgerService",
    "ReviewSession",
    "RuleService",
    "derive_records",
]


# Import services lazily to avoid circular imports through the utils package
def __getattr__(name):
    if name == "AccountService":
        from reconkit.domain.account import AccountService
        return AccountService
    if name == "LedgerService":
        from reconkit.domain.ledger import LedgerService
        return LedgerService
    if name == "ReviewSession":
        from reconkit.domain.review import ReviewSession
        return ReviewSession
    if name == "RuleService":
        from reconkit.domain.rules import RuleService
        return RuleService
    if name == "derive_records":
        from reconkit.domain.pipeline import derive_records
        return derive_records
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
