# yardworks/quotes/document.py

"""Printable quote document: letterhead, customer, line items and totals."""

from decimal import Decimal

from yardworks.errors import NotFoundError
from yardworks.records import format_money, to_money
from yardworks.quotes.lifecycle import get_quote_or_404


def terms(validity_days: int) -> list:
    return [
        '50% deposit required upon acceptance',
        'Balance due upon completion',
        f'Quote valid for {validity_days} days from date issued',
        'Weather delays may affect timeline',
        'Client responsible for utility markings',
    ]


def build_document(store, quote_id: int, config) -> dict:
    quote = get_quote_or_404(store, quote_id)
    customer = store.get_customer(quote.customer_id)
    if customer is None:
        raise NotFoundError('Customer not found')
    items = store.list_quote_items(quote_id)

    tax_rate = Decimal(str(config['TAX_RATE']))
    subtotal = to_money(sum((i.total for i in items), Decimal('0')))
    tax = to_money(subtotal * tax_rate)

    return {
        'company': {
            'name': config['COMPANY_NAME'],
            'tagline': config['COMPANY_TAGLINE'],
            'address': config['COMPANY_ADDRESS'],
            'phone': config['COMPANY_PHONE'],
        },
        'quote': quote.to_dict(),
        'customer': customer.to_dict(),
        'items': [i.to_dict() for i in items],
        'subtotal': format_money(subtotal),
        'taxRate': str(tax_rate),
        'tax': format_money(tax),
        'total': format_money(subtotal + tax),
        'terms': terms(config['QUOTE_VALIDITY_DAYS']),
    }
