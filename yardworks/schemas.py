# yardworks/schemas.py
"""Request payload schemas.

Payloads are checked once, here, at the HTTP boundary; everything past this
point trusts its input.  Wire keys are camelCase, attributes snake_case.
Money is accepted as a string or a number and normalised to a cent-rounded
``Decimal``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, Literal, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StringConstraints,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from yardworks.records import (
    CustomerChanges,
    NewCustomer,
    QuoteChanges,
    QuoteItemChanges,
    to_money,
)

Text = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
# upper bounds match the Numeric(10, 2) and INTEGER columns
MAX_MONEY = Decimal('99999999.99')
MAX_QUANTITY = 100_000
MAX_PROPERTY_SIZE = 1_000_000_000

Money = Annotated[Decimal, Field(ge=0, le=MAX_MONEY), AfterValidator(to_money)]
# matched case-insensitively, so stored lower-cased
Email = Annotated[EmailStr, AfterValidator(lambda value: value.lower())]
Status = Literal['pending', 'approved', 'rejected', 'completed']


class Payload(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra='forbid',
    )


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class CustomerCreate(Payload):
    name: Text
    email: Email
    phone: Text
    address: Text

    def to_new(self) -> NewCustomer:
        return NewCustomer(name=self.name, email=self.email,
                           phone=self.phone, address=self.address)


class CustomerUpdate(Payload):
    name: Optional[Text] = None
    email: Optional[Email] = None
    phone: Optional[Text] = None
    address: Optional[Text] = None

    def to_changes(self) -> CustomerChanges:
        return CustomerChanges(**self.model_dump(exclude_none=True))


class QuoteRequest(Payload):
    """A customer's quote request: contact details plus the project."""

    customer_name: Text
    customer_email: Email
    customer_phone: Text
    customer_address: Text
    project_type: Text
    property_size: int = Field(ge=1, le=MAX_PROPERTY_SIZE)
    description: Text
    budget_range: Optional[str] = None
    timeline: Optional[str] = None
    requested_date: Optional[datetime] = None

    @field_validator('requested_date')
    @classmethod
    def requested_date_utc(cls, value):
        return _as_utc(value)

    def customer(self) -> NewCustomer:
        return NewCustomer(
            name=self.customer_name,
            email=self.customer_email,
            phone=self.customer_phone,
            address=self.customer_address,
        )


class QuotePatch(Payload):
    project_type: Optional[Text] = None
    property_size: Optional[int] = Field(default=None, ge=1, le=MAX_PROPERTY_SIZE)
    budget_range: Optional[str] = None
    description: Optional[Text] = None
    timeline: Optional[str] = None
    requested_date: Optional[datetime] = None
    status: Optional[Status] = None
    amount: Optional[Money] = None

    @field_validator('requested_date')
    @classmethod
    def requested_date_utc(cls, value):
        return _as_utc(value)

    def to_changes(self) -> QuoteChanges:
        return QuoteChanges(**self.model_dump(exclude_none=True))


class QuoteItemCreate(Payload):
    item: Text
    quantity: int = Field(ge=1, le=MAX_QUANTITY)
    unit_price: Money
    total: Optional[Money] = None

    @model_validator(mode='after')
    def check_total(self):
        expected = to_money(self.quantity * self.unit_price)
        if self.total is None:
            self.total = expected
        elif self.total != expected:
            raise ValueError(
                f'total {self.total} does not equal quantity x unitPrice ({expected})'
            )
        return self


class QuoteItemPatch(Payload):
    item: Optional[Text] = None
    quantity: Optional[int] = Field(default=None, ge=1, le=MAX_QUANTITY)
    unit_price: Optional[Money] = None
    total: Optional[Money] = None

    def to_changes(self) -> QuoteItemChanges:
        return QuoteItemChanges(**self.model_dump(exclude_none=True))


class ApproveRequest(Payload):
    amount: Money
