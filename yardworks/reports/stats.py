# yardworks/reports/stats.py
"""Read-only statistics over the quote and customer collections.

Everything here is recomputed from a full scan on every call.  Missing
amounts count as zero and empty collections give zeros, never errors.
"""

from __future__ import annotations

import calendar
from collections import Counter, OrderedDict
from decimal import Decimal
from typing import List, Optional, Tuple

from yardworks.records import format_money, to_money, utcnow

ZERO = Decimal('0.00')
MONTHS_SHOWN = 6


def _amount(quote) -> Decimal:
    return quote.amount if quote.amount is not None else ZERO


def _revenue(quotes) -> Decimal:
    return to_money(sum((_amount(q) for q in quotes), ZERO))


def _percent(part: int, whole: int) -> float:
    if not whole:
        return 0.0
    return round(part / whole * 100, 2)


def _count(quotes, status: str) -> int:
    return sum(1 for q in quotes if q.status == status)


def _recent_months(now, count: int = MONTHS_SHOWN) -> List[Tuple[int, int]]:
    """(year, month) pairs for the ``count`` months ending with ``now``'s."""
    year, month = now.year, now.month
    months = []
    for _ in range(count):
        months.append((year, month))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    months.reverse()
    return months


def monthly_revenue(quotes, now=None) -> list:
    """Approved revenue per month, bucketed by the quote's creation month."""
    now = now or utcnow()
    totals = OrderedDict((ym, ZERO) for ym in _recent_months(now))
    for q in quotes:
        if q.status != 'approved':
            continue
        key = (q.created_at.year, q.created_at.month)
        if key in totals:
            totals[key] += _amount(q)
    return [
        {'month': calendar.month_abbr[m], 'year': y, 'revenue': format_money(total)}
        for (y, m), total in totals.items()
    ]


def dashboard_stats(store, now=None) -> dict:
    quotes = store.list_quotes()
    approved = [q for q in quotes if q.status == 'approved']
    return {
        'totalQuotes': len(quotes),
        'approvedQuotes': len(approved),
        'pendingQuotes': _count(quotes, 'pending'),
        'rejectedQuotes': _count(quotes, 'rejected'),
        'completedQuotes': _count(quotes, 'completed'),
        'totalRevenue': format_money(_revenue(approved)),
        'monthlyRevenue': monthly_revenue(quotes, now),
    }


def customer_stats(store, customer_id: int) -> dict:
    quotes = store.list_quotes_by(lambda q: q.customer_id == customer_id)
    approved = [q for q in quotes if q.status == 'approved']
    return {
        'customerId': customer_id,
        'totalQuotes': len(quotes),
        'approvedQuotes': len(approved),
        'pendingQuotes': _count(quotes, 'pending'),
        'totalValue': format_money(_revenue(approved)),
    }


def report_metrics(store) -> dict:
    quotes = store.list_quotes()
    total = len(quotes)
    approved = [q for q in quotes if q.status == 'approved']

    average = ZERO
    if approved:
        average = to_money(_revenue(approved) / len(approved))

    by_type = Counter(q.project_type for q in quotes)
    project_types = [
        {'projectType': name, 'count': count, 'percentage': _percent(count, total)}
        for name, count in sorted(by_type.items(), key=lambda kv: (-kv[1], kv[0]))
    ]

    return {
        'totalQuotes': total,
        'approvedQuotes': len(approved),
        'pendingQuotes': _count(quotes, 'pending'),
        'rejectedQuotes': _count(quotes, 'rejected'),
        'completedQuotes': _count(quotes, 'completed'),
        'conversionRate': _percent(len(approved), total),
        'averageQuoteValue': format_money(average),
        'projectTypes': project_types,
    }


def calendar_view(store, year: Optional[int] = None, month: Optional[int] = None) -> list:
    """Quotes grouped by the day they were requested for, oldest day first.

    Each quote carries its customer (or ``None`` when the reference is
    dangling).  ``year``/``month`` narrow the view to one month.
    """
    customers = {c.id: c for c in store.list_customers()}

    def wanted(q):
        day = q.requested_date
        if year is not None and day.year != year:
            return False
        if month is not None and day.month != month:
            return False
        return True

    days = {}
    for q in store.list_quotes_by(wanted):
        entry = q.to_dict()
        customer = customers.get(q.customer_id)
        entry['customer'] = customer.to_dict() if customer else None
        days.setdefault(q.requested_date.date(), []).append(entry)

    return [
        {'date': day.isoformat(), 'quotes': days[day]}
        for day in sorted(days)
    ]
