# yardworks/records.py
"""Plain record types shared by the stores, lifecycle and aggregation code.

Records are what the stores hand out.  They are always copies, so mutating a
record never changes what is stored; changes go back through the store's
``update_*`` methods using the ``*Changes`` commands below, which name the
fields a caller is allowed to touch.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

CENTS = Decimal('0.01')

QUOTE_STATUSES = ('pending', 'approved', 'rejected', 'completed')


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_money(value) -> Optional[Decimal]:
    """Normalise ``value`` (str, int, float or Decimal) to a cent-rounded Decimal."""
    if value is None or value == '':
        return None
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    try:
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise ValueError(f'{value} is not a representable amount') from None


def format_money(value: Optional[Decimal]) -> Optional[str]:
    if value is None:
        return None
    return str(to_money(value))


def format_quote_number(prefix: str, year: int, sequence: int) -> str:
    return f'{prefix}-{year}-{sequence:03d}'


def valid_until(created_at: datetime, days: int) -> datetime:
    return created_at + timedelta(days=days)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class Customer:
    id: int
    name: str
    email: str
    phone: str
    address: str
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'address': self.address,
            'createdAt': _iso(self.created_at),
        }


@dataclass
class Quote:
    id: int
    quote_number: str
    customer_id: int
    project_type: str
    property_size: int
    description: str
    requested_date: datetime
    valid_until: datetime
    created_at: datetime
    updated_at: datetime
    status: str = 'pending'
    amount: Optional[Decimal] = None
    budget_range: Optional[str] = None
    timeline: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'quoteNumber': self.quote_number,
            'customerId': self.customer_id,
            'projectType': self.project_type,
            'propertySize': self.property_size,
            'budgetRange': self.budget_range,
            'description': self.description,
            'timeline': self.timeline,
            'status': self.status,
            'amount': format_money(self.amount),
            'requestedDate': _iso(self.requested_date),
            'validUntil': _iso(self.valid_until),
            'createdAt': _iso(self.created_at),
            'updatedAt': _iso(self.updated_at),
        }


@dataclass
class QuoteItem:
    id: int
    quote_id: int
    item: str
    quantity: int
    unit_price: Decimal
    total: Decimal

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'quoteId': self.quote_id,
            'item': self.item,
            'quantity': self.quantity,
            'unitPrice': format_money(self.unit_price),
            'total': format_money(self.total),
        }


@dataclass
class NewCustomer:
    name: str
    email: str
    phone: str
    address: str


@dataclass
class NewQuote:
    customer_id: int
    project_type: str
    property_size: int
    description: str
    requested_date: Optional[datetime] = None
    budget_range: Optional[str] = None
    timeline: Optional[str] = None
    status: str = 'pending'
    amount: Optional[Decimal] = None


@dataclass
class NewQuoteItem:
    quote_id: int
    item: str
    quantity: int
    unit_price: Decimal
    total: Decimal


class _Changes:
    """Partial update; ``None`` means "leave the stored value alone"."""

    def provided(self) -> dict:
        return {f.name: getattr(self, f.name)
                for f in fields(self) if getattr(self, f.name) is not None}

    def apply(self, record):
        return replace(record, **self.provided())


@dataclass
class CustomerChanges(_Changes):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


@dataclass
class QuoteChanges(_Changes):
    project_type: Optional[str] = None
    property_size: Optional[int] = None
    budget_range: Optional[str] = None
    description: Optional[str] = None
    timeline: Optional[str] = None
    requested_date: Optional[datetime] = None
    status: Optional[str] = None
    amount: Optional[Decimal] = None


@dataclass
class QuoteItemChanges(_Changes):
    item: Optional[str] = None
    quantity: Optional[int] = None
    unit_price: Optional[Decimal] = None
    total: Optional[Decimal] = None
