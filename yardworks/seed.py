# yardworks/seed.py
"""Sample customers and quotes for demos and calendar testing."""

import logging
from datetime import datetime, time, timedelta, timezone

import click
from flask.cli import with_appcontext

from yardworks.records import NewCustomer, NewQuote, to_money

SAMPLE_CUSTOMERS = [
    ('John Smith', 'john@example.com', '(555) 123-4567', '123 Main St, Anytown, CA 90210'),
    ('Sarah Johnson', 'sarah@example.com', '(555) 234-5678', '456 Oak Ave, Anytown, CA 90210'),
    ('Mike Davis', 'mike@example.com', '(555) 345-6789', '789 Pine Rd, Anytown, CA 90210'),
    ('Emily Wilson', 'emily@example.com', '(555) 456-7890', '321 Elm St, Anytown, CA 90210'),
]

# (customer index, project type, size, budget, description, timeline, day offset, status, amount)
SAMPLE_QUOTES = [
    (0, 'Lawn Installation', 2000, '$2,000 - $5,000',
     'New lawn installation with irrigation system', '2-3 weeks', 1, 'pending', None),
    (1, 'Garden Design', 1500, '$1,500 - $3,000',
     'Backyard garden design with flower beds', '1-2 weeks', 5, 'approved', '2200.00'),
    (2, 'Tree Removal', 500, '$500 - $1,000',
     'Remove two large oak trees from backyard', '1 week', 10, 'completed', '750.00'),
    (3, 'Landscape Maintenance', 3000, '$300 - $500',
     'Monthly landscape maintenance service', 'Ongoing', 15, 'approved', '400.00'),
    (0, 'Patio Installation', 800, '$3,000 - $6,000',
     'Stone patio installation with seating area', '3-4 weeks', 20, 'pending', None),
    (1, 'Sprinkler System', 2500, '$1,000 - $2,500',
     'Install automated sprinkler system for front yard', '1-2 weeks', -5, 'completed', '1800.00'),
]


def seed_sample_data(store, today=None) -> int:
    """Load the sample records, reusing customers that already exist.

    Returns the number of quotes created.
    """
    today = today or datetime.now(timezone.utc).date()
    midnight = datetime.combine(today, time(), tzinfo=timezone.utc)

    customers = []
    for name, email, phone, address in SAMPLE_CUSTOMERS:
        customer = store.get_customer_by_email(email)
        if customer is None:
            customer = store.create_customer(
                NewCustomer(name=name, email=email, phone=phone, address=address))
        customers.append(customer)

    for idx, ptype, size, budget, desc, timeline, offset, status, amount in SAMPLE_QUOTES:
        store.create_quote(NewQuote(
            customer_id=customers[idx].id,
            project_type=ptype,
            property_size=size,
            budget_range=budget,
            description=desc,
            timeline=timeline,
            requested_date=midnight + timedelta(days=offset),
            status=status,
            amount=to_money(amount),
        ))
    logging.info("seeded %d customers and %d quotes",
                 len(customers), len(SAMPLE_QUOTES))
    return len(SAMPLE_QUOTES)


@click.command('seed-data')
@with_appcontext
def seed_data_command() -> None:
    """Load sample customers and quotes into the configured store."""
    from yardworks import get_store
    count = seed_sample_data(get_store())
    click.echo(f'Created {count} sample quotes')
