"""SQLAlchemy models for the reconkit database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Account(Base):
    """Known asset, savings or debt account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    kind = Column(String, nullable=False, default="asset")
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class TypeRule(Base):
    """Bank code to canonical type mapping model."""

    __tablename__ = "type_rules"

    id = Column(Integer, primary_key=True)
    bank_code = Column(String, nullable=False)
    maps_to = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class MerchantRule(Base):
    """Merchant/description rule model."""

    __tablename__ = "merchant_rules"

    id = Column(Integer, primary_key=True)
    contains = Column(String, nullable=False, default="")
    match_description = Column(Boolean, default=True, nullable=False)
    match_type = Column(Boolean, default=False, nullable=False)
    match_amount = Column(Boolean, default=False, nullable=False)
    use_regex = Column(Boolean, default=False, nullable=False)
    match_type_value = Column(String, nullable=True)
    match_amount_value = Column(Numeric(12, 2), nullable=True)
    set_description = Column(String, nullable=True)
    set_category = Column(String, nullable=True)
    set_type = Column(String, nullable=True)
    set_from_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    set_to_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    set_notes = Column(String, nullable=True)
    sort_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class TransferRule(Base):
    """Transfer pairing rule model."""

    __tablename__ = "transfer_rules"

    id = Column(Integer, primary_key=True)
    label = Column(String, nullable=True)
    from_desc_contains = Column(String, nullable=False)
    to_desc_contains = Column(String, nullable=False)
    tolerance_days = Column(Integer, default=2, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Transaction(Base):
    """Committed ledger transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    debt_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    counterparty_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    date = Column(Date, nullable=False)
    description = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    type = Column(String, nullable=False)
    category = Column(String, nullable=False)
    notes = Column(String, nullable=True)
    imported_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    account = relationship("Account", foreign_keys=[account_id])
    debt = relationship("Account", foreign_keys=[debt_id])


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
