"""
Account model — a single bank account record.

Each account has:
  - An integer identity primary key, assigned by the database on first save
  - A holder name, stored exactly as submitted
  - A unique account number ("ACC" + epoch milliseconds, set by the service)
  - A balance stored as NUMERIC(19, 2)
  - A currency drawn from the closed Currency enum, stored by name

Balance management:
  There is no posting of deposits or withdrawals here; the balance is
  simply whatever the last create/update request supplied. Request
  validation keeps it non-negative.

Timestamps:
  created_at is set once on first save. updated_at is set on first save
  and rewritten on every save (see AccountRepository.save). updated_at
  is never exposed in API responses.
"""

import enum
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import String, Numeric, DateTime, Enum
from sqlalchemy.orm import Mapped, mapped_column

from banklite.database import Base


class Currency(str, enum.Enum):
    """
    Currencies an account may be held in.

    Inherits from str so the enum value serializes naturally to JSON.
    The set is fixed at build time; anything else is rejected during
    request validation.
    """
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    JPY = "JPY"
    CAD = "CAD"
    AUD = "AUD"
    CHF = "CHF"
    INR = "INR"


class Account(Base):
    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(
        primary_key=True,
        autoincrement=True,
    )

    account_holder_name: Mapped[str] = mapped_column(
        String,
        nullable=False,
    )

    account_number: Mapped[str] = mapped_column(
        String,
        unique=True,
        nullable=False,
    )

    balance: Mapped[Decimal] = mapped_column(
        Numeric(precision=19, scale=2),
        nullable=False,
    )

    # Stored as the enum name (VARCHAR), not a native database enum
    currency: Mapped[Currency] = mapped_column(
        Enum(Currency, native_enum=False, length=3),
        nullable=False,
    )

    # Audit timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self) -> str:
        return f"<Account {self.id} {self.account_number} ({self.currency})>"
