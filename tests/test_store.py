import os
import sys
from datetime import datetime, timedelta, timezone
from decimal import Decimal

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from yardworks.records import (
    CustomerChanges,
    NewCustomer,
    NewQuote,
    NewQuoteItem,
    QuoteChanges,
    QuoteItemChanges,
)
from yardworks.store import MemoryStore


class FakeClock:
    def __init__(self, start):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, **kw):
        self.now = self.now + timedelta(**kw)


def make_store(start=datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)):
    clock = FakeClock(start)
    return MemoryStore(clock=clock), clock


def new_quote(customer_id=1, **kw):
    data = dict(customer_id=customer_id, project_type='lawn-care',
                property_size=1000, description='test')
    data.update(kw)
    return NewQuote(**data)


def test_customer_ids_are_sequential():
    store, _ = make_store()
    a = store.create_customer(NewCustomer('A', 'a@x.com', '555', '1 Rd'))
    b = store.create_customer(NewCustomer('B', 'b@x.com', '556', '2 Rd'))
    assert (a.id, b.id) == (1, 2)
    assert store.get_customer_by_email('b@x.com').id == 2
    assert store.get_customer(99) is None
    assert [c.id for c in store.list_customers()] == [1, 2]


def test_quote_numbers_and_validity():
    store, clock = make_store()
    q1 = store.create_quote(new_quote())
    q2 = store.create_quote(new_quote())
    assert q1.quote_number == 'QT-2026-001'
    assert q2.quote_number == 'QT-2026-002'
    assert q1.status == 'pending' and q1.amount is None
    assert q1.valid_until == clock.now + timedelta(days=30)
    assert q1.requested_date == clock.now
    assert store.get_quote_by_number('QT-2026-002').id == q2.id


def test_quote_sequence_does_not_reset_across_years():
    store, clock = make_store(datetime(2026, 12, 31, 23, 0, tzinfo=timezone.utc))
    store.create_quote(new_quote())
    clock.advance(hours=2)
    q = store.create_quote(new_quote())
    assert q.quote_number == 'QT-2027-002'


def test_update_quote_merges_and_bumps_updated_at():
    store, clock = make_store()
    q = store.create_quote(new_quote(timeline='2 weeks'))
    clock.advance(minutes=5)
    updated = store.update_quote(q.id, QuoteChanges(status='completed'))
    assert updated.status == 'completed'
    assert updated.timeline == '2 weeks'
    assert updated.quote_number == q.quote_number
    assert updated.created_at == q.created_at
    assert updated.updated_at == q.created_at + timedelta(minutes=5)
    assert store.update_quote(42, QuoteChanges(status='approved')) is None


def test_returned_records_are_copies():
    store, _ = make_store()
    q = store.create_quote(new_quote())
    q.status = 'approved'
    assert store.get_quote(q.id).status == 'pending'
    listed = store.list_quotes()
    listed[0].description = 'changed'
    assert store.get_quote(q.id).description == 'test'


def test_customer_update_keeps_identity():
    store, _ = make_store()
    c = store.create_customer(NewCustomer('A', 'a@x.com', '555', '1 Rd'))
    updated = store.update_customer(c.id, CustomerChanges(phone='777'))
    assert updated.phone == '777'
    assert updated.email == 'a@x.com'
    assert updated.created_at == c.created_at
    assert store.update_customer(5, CustomerChanges(name='x')) is None


def test_quote_items_crud():
    store, _ = make_store()
    q = store.create_quote(new_quote())
    other = store.create_quote(new_quote())
    it = store.add_quote_item(NewQuoteItem(q.id, 'Sod', 2, Decimal('10.00'), Decimal('20.00')))
    store.add_quote_item(NewQuoteItem(other.id, 'Mulch', 1, Decimal('5.00'), Decimal('5.00')))
    assert [i.item for i in store.list_quote_items(q.id)] == ['Sod']

    changed = store.update_quote_item(it.id, QuoteItemChanges(quantity=3, total=Decimal('30.00')))
    assert changed.quantity == 3 and changed.unit_price == Decimal('10.00')

    assert store.delete_quote_item(it.id) is True
    assert store.delete_quote_item(it.id) is False
    assert store.list_quote_items(q.id) == []


def test_ids_not_reused_after_delete():
    store, _ = make_store()
    q = store.create_quote(new_quote())
    first = store.add_quote_item(NewQuoteItem(q.id, 'Sod', 1, Decimal('1.00'), Decimal('1.00')))
    store.delete_quote_item(first.id)
    second = store.add_quote_item(NewQuoteItem(q.id, 'Sod', 1, Decimal('1.00'), Decimal('1.00')))
    assert second.id == first.id + 1


def test_list_quotes_by_predicate():
    store, _ = make_store()
    store.create_quote(new_quote(customer_id=1))
    store.create_quote(new_quote(customer_id=2))
    store.create_quote(new_quote(customer_id=1))
    assert [q.id for q in store.list_quotes_by(lambda q: q.customer_id == 1)] == [1, 3]
