"""
Pydantic schemas for Account endpoints.

These schemas define the API contract for account creation, update and
retrieval. JSON keys are camelCase (accountHolderName, createdAt, ...);
Python attributes stay snake_case.

Balances travel as decimals. Requests accept a JSON number or a numeric
string; responses emit a string with two fractional digits ("1000.00")
so the NUMERIC(19, 2) value is never squeezed through a float.
"""

from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from banklite.models.account import Currency

CENT = Decimal("0.01")

# NUMERIC(19, 2) leaves 17 digits before the decimal point.
MAX_BALANCE = Decimal("1e17")


class AccountRequest(BaseModel):
    """
    Request body for POST /api/v1/accounts and PUT /api/v1/accounts/{id}.

    Only these three fields are read. id, accountNumber and createdAt are
    system-assigned; if a client sends them they are ignored.

    Every field defaults to None and is validated anyway, so a missing
    field reports the same message as an explicit null.
    """
    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    account_holder_name: str | None = Field(
        default=None,
        validate_default=True,
        description="Name of the account holder",
        examples=["John Doe"],
    )
    balance: Decimal | None = Field(
        default=None,
        validate_default=True,
        description="Opening or replacement balance, two decimal places",
        examples=["1000.00"],
    )
    currency: Currency | None = Field(
        default=None,
        validate_default=True,
        description="Currency symbol",
        examples=["USD"],
    )

    @field_validator("account_holder_name")
    @classmethod
    def holder_name_not_blank(cls, value: str | None) -> str:
        if value is None or not value.strip():
            raise PydanticCustomError("required", "Account holder name is required")
        return value

    @field_validator("balance")
    @classmethod
    def balance_non_negative(cls, value: Decimal | None) -> Decimal:
        if value is None:
            raise PydanticCustomError("required", "Balance is required")
        if value < 0:
            raise PydanticCustomError(
                "greater_than_equal", "Balance must be greater than or equal to 0"
            )
        if value >= MAX_BALANCE:
            raise PydanticCustomError(
                "less_than", "Balance must be less than 100000000000000000"
            )
        return value.quantize(CENT, rounding=ROUND_HALF_UP)

    @field_validator("currency")
    @classmethod
    def currency_present(cls, value: Currency | None) -> Currency:
        if value is None:
            raise PydanticCustomError("required", "Currency is required")
        return value


class AccountResponse(BaseModel):
    """Public representation of a bank account. updated_at is deliberately absent."""
    id: int
    account_holder_name: str
    account_number: str
    balance: Decimal
    currency: Currency
    created_at: datetime

    model_config = {
        "from_attributes": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    @field_validator("created_at")
    @classmethod
    def created_at_as_utc(cls, value: datetime) -> datetime:
        # SQLite returns stored timestamps without an offset; they are UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
