# yardworks/customers/utils.py

"""Customer helpers for the customers blueprint."""

import logging

from yardworks.errors import ConflictError, NotFoundError


def get_customer_or_404(store, customer_id: int):
    customer = store.get_customer(customer_id)
    if customer is None:
        raise NotFoundError('Customer not found')
    return customer


def create_customer(store, payload):
    if store.get_customer_by_email(payload.email):
        raise ConflictError('Customer with this email already exists')
    customer = store.create_customer(payload.to_new())
    logging.info("customer %s created for %s", customer.id, customer.email)
    return customer


def update_customer(store, customer_id: int, payload):
    get_customer_or_404(store, customer_id)
    changes = payload.to_changes()
    if changes.email is not None:
        other = store.get_customer_by_email(changes.email)
        if other is not None and other.id != customer_id:
            raise ConflictError('Customer with this email already exists')
    return store.update_customer(customer_id, changes)
