import os
import sys
from decimal import Decimal

import pytest
from pydantic import ValidationError

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from yardworks.errors import IllegalTransitionError, InvalidDataError, NotFoundError
from yardworks.quotes import lifecycle
from yardworks.records import QuoteChanges
from yardworks.schemas import QuoteItemCreate, QuoteItemPatch, QuoteRequest
from yardworks.store import MemoryStore

REQUEST = {
    'customerName': 'A',
    'customerEmail': 'a@x.com',
    'customerPhone': '555',
    'customerAddress': '1 Rd',
    'projectType': 'lawn-care',
    'propertySize': 1000,
    'description': 'test',
}


def submit(store, **overrides):
    data = dict(REQUEST, **overrides)
    return lifecycle.request_quote(store, QuoteRequest.model_validate(data))


def test_request_creates_pending_quote_and_customer():
    store = MemoryStore()
    quote, customer = submit(store)
    assert quote.status == 'pending'
    assert quote.amount is None
    assert quote.customer_id == customer.id
    assert customer.email == 'a@x.com'


def test_request_reuses_customer_by_email():
    store = MemoryStore()
    _, first = submit(store)
    quote, second = submit(store, customerName='Someone Else', customerPhone='999')
    assert second.id == first.id
    assert second.name == 'A'
    assert len(store.list_customers()) == 1
    assert quote.quote_number.endswith('-002')


def test_approve_sets_amount():
    store = MemoryStore()
    quote, _ = submit(store)
    approved = lifecycle.approve_quote(store, quote.id, Decimal('500'))
    assert approved.status == 'approved'
    assert approved.amount == Decimal('500.00')


def test_second_approve_is_rejected_and_keeps_record():
    store = MemoryStore()
    quote, _ = submit(store)
    lifecycle.approve_quote(store, quote.id, Decimal('500'))
    with pytest.raises(IllegalTransitionError):
        lifecycle.approve_quote(store, quote.id, Decimal('900'))
    stored = store.get_quote(quote.id)
    assert stored.status == 'approved'
    assert stored.amount == Decimal('500.00')


def test_reject_only_from_pending():
    store = MemoryStore()
    quote, _ = submit(store)
    rejected = lifecycle.reject_quote(store, quote.id)
    assert rejected.status == 'rejected'
    assert rejected.amount is None
    with pytest.raises(IllegalTransitionError):
        lifecycle.approve_quote(store, quote.id, Decimal('10'))


def test_generic_update_may_leave_terminal_state():
    store = MemoryStore()
    quote, _ = submit(store)
    lifecycle.reject_quote(store, quote.id)
    reopened = lifecycle.update_quote(store, quote.id, QuoteChanges(status='pending'))
    assert reopened.status == 'pending'
    completed = lifecycle.update_quote(store, quote.id, QuoteChanges(status='completed'))
    assert completed.status == 'completed'


def test_missing_quote_raises_not_found():
    store = MemoryStore()
    with pytest.raises(NotFoundError):
        lifecycle.approve_quote(store, 7, Decimal('1'))
    with pytest.raises(NotFoundError):
        lifecycle.reject_quote(store, 7)
    with pytest.raises(NotFoundError):
        lifecycle.update_quote(store, 7, QuoteChanges(status='completed'))


def test_item_total_is_computed_when_missing():
    payload = QuoteItemCreate.model_validate({'item': 'Sod', 'quantity': 3, 'unitPrice': '2.50'})
    assert payload.total == Decimal('7.50')


def test_item_total_must_match():
    with pytest.raises(ValidationError):
        QuoteItemCreate.model_validate(
            {'item': 'Sod', 'quantity': 3, 'unitPrice': '2.50', 'total': '8.00'})


def test_add_item_requires_quote():
    store = MemoryStore()
    payload = QuoteItemCreate.model_validate({'item': 'Sod', 'quantity': 1, 'unitPrice': 3})
    with pytest.raises(NotFoundError):
        lifecycle.add_item(store, 1, payload)


def test_update_item_recomputes_total():
    store = MemoryStore()
    quote, _ = submit(store)
    item = lifecycle.add_item(store, quote.id, QuoteItemCreate.model_validate(
        {'item': 'Sod', 'quantity': 2, 'unitPrice': '10'}))
    updated = lifecycle.update_item(store, quote.id, item.id,
                                    QuoteItemPatch.model_validate({'quantity': 5}))
    assert updated.total == Decimal('50.00')
    with pytest.raises(InvalidDataError):
        lifecycle.update_item(store, quote.id, item.id,
                              QuoteItemPatch.model_validate({'total': '1.00'}))


def test_item_must_belong_to_quote():
    store = MemoryStore()
    first, _ = submit(store)
    second, _ = submit(store)
    item = lifecycle.add_item(store, first.id, QuoteItemCreate.model_validate(
        {'item': 'Sod', 'quantity': 1, 'unitPrice': '1'}))
    with pytest.raises(NotFoundError):
        lifecycle.remove_item(store, second.id, item.id)
    lifecycle.remove_item(store, first.id, item.id)
    assert store.list_quote_items(first.id) == []
