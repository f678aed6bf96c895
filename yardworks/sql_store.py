# yardworks/sql_store.py
"""SQLAlchemy backed implementation of :class:`~yardworks.store.RecordStore`.

Selected with ``STORE_BACKEND=sql``.  Every call runs inside the Flask
application context so ``db.session`` is available; each mutation commits
immediately, matching the one-call-one-change behaviour of the memory store.
"""

from __future__ import annotations

from datetime import timezone

from sqlalchemy import func

from yardworks import db
from yardworks import models
from yardworks.records import Customer, Quote, QuoteItem, valid_until
from yardworks.store import RecordStore


def _aware(value):
    # SQLite hands back naive datetimes even for timezone=True columns
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _customer(row: models.Customer) -> Customer:
    return Customer(
        id=row.id,
        name=row.name,
        email=row.email,
        phone=row.phone,
        address=row.address,
        created_at=_aware(row.created_at),
    )


def _quote(row: models.Quote) -> Quote:
    return Quote(
        id=row.id,
        quote_number=row.quote_number,
        customer_id=row.customer_id,
        project_type=row.project_type,
        property_size=row.property_size,
        budget_range=row.budget_range,
        description=row.description,
        timeline=row.timeline,
        status=row.status,
        amount=row.amount,
        requested_date=_aware(row.requested_date),
        valid_until=_aware(row.valid_until),
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
    )


def _item(row: models.QuoteItem) -> QuoteItem:
    return QuoteItem(
        id=row.id,
        quote_id=row.quote_id,
        item=row.item,
        quantity=row.quantity,
        unit_price=row.unit_price,
        total=row.total,
    )


class SqlStore(RecordStore):

    # Customers
    def get_customer(self, customer_id):
        row = db.session.get(models.Customer, customer_id)
        return _customer(row) if row else None

    def get_customer_by_email(self, email):
        row = models.Customer.query.filter_by(email=email).first()
        return _customer(row) if row else None

    def create_customer(self, new):
        row = models.Customer(
            name=new.name,
            email=new.email,
            phone=new.phone,
            address=new.address,
            created_at=self.clock(),
        )
        db.session.add(row)
        db.session.commit()
        return _customer(row)

    def update_customer(self, customer_id, changes):
        row = db.session.get(models.Customer, customer_id)
        if row is None:
            return None
        for name, value in changes.provided().items():
            setattr(row, name, value)
        db.session.commit()
        return _customer(row)

    def list_customers(self):
        return [_customer(r) for r in models.Customer.query.order_by(models.Customer.id).all()]

    # Quotes
    def get_quote(self, quote_id):
        row = db.session.get(models.Quote, quote_id)
        return _quote(row) if row else None

    def get_quote_by_number(self, quote_number):
        row = models.Quote.query.filter_by(quote_number=quote_number).first()
        return _quote(row) if row else None

    def create_quote(self, new):
        now = self.clock()
        seq = (db.session.query(func.max(models.Quote.number_seq)).scalar() or 0) + 1
        row = models.Quote(
            quote_number=self._quote_number(seq, now),
            number_seq=seq,
            customer_id=new.customer_id,
            project_type=new.project_type,
            property_size=new.property_size,
            budget_range=new.budget_range,
            description=new.description,
            timeline=new.timeline,
            status=new.status,
            amount=new.amount,
            requested_date=new.requested_date or now,
            valid_until=valid_until(now, self.validity_days),
            created_at=now,
            updated_at=now,
        )
        db.session.add(row)
        db.session.commit()
        return _quote(row)

    def update_quote(self, quote_id, changes):
        row = db.session.get(models.Quote, quote_id)
        if row is None:
            return None
        for name, value in changes.provided().items():
            setattr(row, name, value)
        row.updated_at = self.clock()
        db.session.commit()
        return _quote(row)

    def list_quotes(self):
        return [_quote(r) for r in models.Quote.query.order_by(models.Quote.id).all()]

    # Quote items
    def get_quote_item(self, item_id):
        row = db.session.get(models.QuoteItem, item_id)
        return _item(row) if row else None

    def list_quote_items(self, quote_id):
        rows = (models.QuoteItem.query
                .filter_by(quote_id=quote_id)
                .order_by(models.QuoteItem.id)
                .all())
        return [_item(r) for r in rows]

    def add_quote_item(self, new):
        row = models.QuoteItem(
            quote_id=new.quote_id,
            item=new.item,
            quantity=new.quantity,
            unit_price=new.unit_price,
            total=new.total,
        )
        db.session.add(row)
        db.session.commit()
        return _item(row)

    def update_quote_item(self, item_id, changes):
        row = db.session.get(models.QuoteItem, item_id)
        if row is None:
            return None
        for name, value in changes.provided().items():
            setattr(row, name, value)
        db.session.commit()
        return _item(row)

    def delete_quote_item(self, item_id):
        row = db.session.get(models.QuoteItem, item_id)
        if row is None:
            return False
        db.session.delete(row)
        db.session.commit()
        return True
