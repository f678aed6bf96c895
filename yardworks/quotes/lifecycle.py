# yardworks/quotes/lifecycle.py
"""Quote lifecycle rules.

Quotes start out ``pending``.  The dedicated approve/reject actions only
move a quote out of ``pending``; a generic update may still write any of the
four states (including ``completed``) without restriction.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from yardworks.errors import IllegalTransitionError, InvalidDataError, NotFoundError
from yardworks.records import NewQuote, NewQuoteItem, QuoteChanges, to_money

# target state -> states it may be entered from via a dedicated action
TRANSITIONS = {
    'approved': {'pending'},
    'rejected': {'pending'},
}


def get_quote_or_404(store, quote_id: int):
    quote = store.get_quote(quote_id)
    if quote is None:
        raise NotFoundError('Quote not found')
    return quote


def request_quote(store, req):
    """Create a pending quote for ``req``, reusing the customer by email.

    Returns ``(quote, customer)``.  An existing customer's contact details
    are left as they are.  The customer is written before the quote and is
    not rolled back if the quote write fails.
    """
    customer = store.get_customer_by_email(req.customer_email)
    if customer is None:
        customer = store.create_customer(req.customer())
        logging.info("customer %s created for %s", customer.id, customer.email)
    else:
        logging.info("quote request reuses customer %s", customer.id)

    quote = store.create_quote(NewQuote(
        customer_id=customer.id,
        project_type=req.project_type,
        property_size=req.property_size,
        budget_range=req.budget_range,
        description=req.description,
        timeline=req.timeline,
        requested_date=req.requested_date,
        status='pending',
        amount=None,
    ))
    logging.info("quote %s (%s) requested by customer %s",
                 quote.quote_number, quote.id, customer.id)
    return quote, customer


def _transition(store, quote_id: int, target: str, changes: QuoteChanges):
    quote = get_quote_or_404(store, quote_id)
    if quote.status not in TRANSITIONS[target]:
        raise IllegalTransitionError(quote.quote_number, quote.status, target)
    changes.status = target
    updated = store.update_quote(quote_id, changes)
    logging.info("quote %s %s -> %s", quote.quote_number, quote.status, target)
    return updated


def approve_quote(store, quote_id: int, amount: Decimal):
    return _transition(store, quote_id, 'approved', QuoteChanges(amount=to_money(amount)))


def reject_quote(store, quote_id: int):
    return _transition(store, quote_id, 'rejected', QuoteChanges())


def update_quote(store, quote_id: int, changes: QuoteChanges):
    quote = store.update_quote(quote_id, changes)
    if quote is None:
        raise NotFoundError('Quote not found')
    return quote


def add_item(store, quote_id: int, payload):
    quote = get_quote_or_404(store, quote_id)
    item = store.add_quote_item(NewQuoteItem(
        quote_id=quote.id,
        item=payload.item,
        quantity=payload.quantity,
        unit_price=payload.unit_price,
        total=payload.total,
    ))
    logging.info("item %s added to quote %s", item.id, quote.quote_number)
    return item


def _item_or_404(store, quote_id: int, item_id: int):
    get_quote_or_404(store, quote_id)
    item = store.get_quote_item(item_id)
    if item is None or item.quote_id != quote_id:
        raise NotFoundError('Quote item not found')
    return item


def update_item(store, quote_id: int, item_id: int, payload):
    """Apply a partial item update, keeping ``total`` = quantity x unit price."""
    item = _item_or_404(store, quote_id, item_id)
    changes = payload.to_changes()
    quantity = changes.quantity if changes.quantity is not None else item.quantity
    unit_price = changes.unit_price if changes.unit_price is not None else item.unit_price
    expected = to_money(quantity * unit_price)
    if changes.total is None:
        changes.total = expected
    elif changes.total != expected:
        raise InvalidDataError(
            'total', f'total {changes.total} does not equal quantity x unitPrice ({expected})'
        )
    return store.update_quote_item(item_id, changes)


def remove_item(store, quote_id: int, item_id: int) -> None:
    _item_or_404(store, quote_id, item_id)
    store.delete_quote_item(item_id)
    logging.info("item %s removed from quote %s", item_id, quote_id)
