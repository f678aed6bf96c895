# yardworks/store.py
"""Record store interface and the in-memory implementation.

The store owns the customer, quote and quote-item collections, hands out ids
and quote numbers, and answers lookups and scans.  It does no validation of
its own: payloads arrive already checked by :mod:`yardworks.schemas`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import datetime
from typing import Callable, Dict, Iterable, List, Optional

from .records import (
    Customer,
    CustomerChanges,
    NewCustomer,
    NewQuote,
    NewQuoteItem,
    Quote,
    QuoteChanges,
    QuoteItem,
    QuoteItemChanges,
    format_quote_number,
    utcnow,
    valid_until,
)

Clock = Callable[[], datetime]


class RecordStore(ABC):
    """Persistence contract used by the lifecycle and aggregation code."""

    def __init__(self, quote_prefix: str = 'QT', validity_days: int = 30,
                 clock: Clock = utcnow) -> None:
        self.quote_prefix = quote_prefix
        self.validity_days = validity_days
        self.clock = clock

    # Customers
    @abstractmethod
    def get_customer(self, customer_id: int) -> Optional[Customer]: ...

    @abstractmethod
    def get_customer_by_email(self, email: str) -> Optional[Customer]: ...

    @abstractmethod
    def create_customer(self, new: NewCustomer) -> Customer: ...

    @abstractmethod
    def update_customer(self, customer_id: int, changes: CustomerChanges) -> Optional[Customer]: ...

    @abstractmethod
    def list_customers(self) -> List[Customer]: ...

    # Quotes
    @abstractmethod
    def get_quote(self, quote_id: int) -> Optional[Quote]: ...

    @abstractmethod
    def get_quote_by_number(self, quote_number: str) -> Optional[Quote]: ...

    @abstractmethod
    def create_quote(self, new: NewQuote) -> Quote: ...

    @abstractmethod
    def update_quote(self, quote_id: int, changes: QuoteChanges) -> Optional[Quote]: ...

    @abstractmethod
    def list_quotes(self) -> List[Quote]: ...

    def list_quotes_by(self, predicate: Callable[[Quote], bool]) -> List[Quote]:
        return [q for q in self.list_quotes() if predicate(q)]

    # Quote items
    @abstractmethod
    def get_quote_item(self, item_id: int) -> Optional[QuoteItem]: ...

    @abstractmethod
    def list_quote_items(self, quote_id: int) -> List[QuoteItem]: ...

    @abstractmethod
    def add_quote_item(self, new: NewQuoteItem) -> QuoteItem: ...

    @abstractmethod
    def update_quote_item(self, item_id: int, changes: QuoteItemChanges) -> Optional[QuoteItem]: ...

    @abstractmethod
    def delete_quote_item(self, item_id: int) -> bool: ...

    def _quote_number(self, sequence: int, created_at: datetime) -> str:
        return format_quote_number(self.quote_prefix, created_at.year, sequence)


def _copies(records: Iterable) -> list:
    return [replace(r) for r in records]


class MemoryStore(RecordStore):
    """Dictionary backed store; contents live as long as the process."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._customers: Dict[int, Customer] = {}
        self._quotes: Dict[int, Quote] = {}
        self._items: Dict[int, QuoteItem] = {}
        self._next_customer_id = 1
        self._next_quote_id = 1
        self._next_item_id = 1
        # independent of quote ids, never reset
        self._next_quote_seq = 1

    # Customers
    def get_customer(self, customer_id):
        c = self._customers.get(customer_id)
        return replace(c) if c else None

    def get_customer_by_email(self, email):
        c = next((c for c in self._customers.values() if c.email == email), None)
        return replace(c) if c else None

    def create_customer(self, new):
        cid = self._next_customer_id
        self._next_customer_id += 1
        customer = Customer(
            id=cid,
            name=new.name,
            email=new.email,
            phone=new.phone,
            address=new.address,
            created_at=self.clock(),
        )
        self._customers[cid] = customer
        return replace(customer)

    def update_customer(self, customer_id, changes):
        existing = self._customers.get(customer_id)
        if existing is None:
            return None
        updated = changes.apply(existing)
        self._customers[customer_id] = updated
        return replace(updated)

    def list_customers(self):
        return _copies(self._customers.values())

    # Quotes
    def get_quote(self, quote_id):
        q = self._quotes.get(quote_id)
        return replace(q) if q else None

    def get_quote_by_number(self, quote_number):
        q = next((q for q in self._quotes.values() if q.quote_number == quote_number), None)
        return replace(q) if q else None

    def create_quote(self, new):
        now = self.clock()
        qid = self._next_quote_id
        self._next_quote_id += 1
        seq = self._next_quote_seq
        self._next_quote_seq += 1
        quote = Quote(
            id=qid,
            quote_number=self._quote_number(seq, now),
            customer_id=new.customer_id,
            project_type=new.project_type,
            property_size=new.property_size,
            budget_range=new.budget_range,
            description=new.description,
            timeline=new.timeline,
            requested_date=new.requested_date or now,
            status=new.status,
            amount=new.amount,
            valid_until=valid_until(now, self.validity_days),
            created_at=now,
            updated_at=now,
        )
        self._quotes[qid] = quote
        return replace(quote)

    def update_quote(self, quote_id, changes):
        existing = self._quotes.get(quote_id)
        if existing is None:
            return None
        updated = replace(changes.apply(existing), updated_at=self.clock())
        self._quotes[quote_id] = updated
        return replace(updated)

    def list_quotes(self):
        return _copies(self._quotes.values())

    # Quote items
    def get_quote_item(self, item_id):
        it = self._items.get(item_id)
        return replace(it) if it else None

    def list_quote_items(self, quote_id):
        return _copies(it for it in self._items.values() if it.quote_id == quote_id)

    def add_quote_item(self, new):
        iid = self._next_item_id
        self._next_item_id += 1
        item = QuoteItem(
            id=iid,
            quote_id=new.quote_id,
            item=new.item,
            quantity=new.quantity,
            unit_price=new.unit_price,
            total=new.total,
        )
        self._items[iid] = item
        return replace(item)

    def update_quote_item(self, item_id, changes):
        existing = self._items.get(item_id)
        if existing is None:
            return None
        updated = changes.apply(existing)
        self._items[item_id] = updated
        return replace(updated)

    def delete_quote_item(self, item_id):
        return self._items.pop(item_id, None) is not None
