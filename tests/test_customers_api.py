import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from yardworks import create_app
from yardworks.store import MemoryStore

CUSTOMER = {'name': 'A', 'email': 'a@x.com', 'phone': '555', 'address': '1 Rd'}


def setup_app():
    return create_app('testing', store=MemoryStore())


def test_create_and_fetch_customer():
    client = setup_app().test_client()
    resp = client.post('/api/customers', json=CUSTOMER)
    assert resp.status_code == 201
    body = resp.get_json()
    assert body['id'] == 1
    assert body['email'] == 'a@x.com'
    assert body['createdAt']

    resp = client.get('/api/customers/1')
    assert resp.status_code == 200
    assert resp.get_json()['name'] == 'A'

    resp = client.get('/api/customers')
    assert [c['id'] for c in resp.get_json()] == [1]


def test_duplicate_email_conflicts():
    client = setup_app().test_client()
    assert client.post('/api/customers', json=CUSTOMER).status_code == 201
    resp = client.post('/api/customers', json=dict(CUSTOMER, name='B'))
    assert resp.status_code == 409
    assert 'already exists' in resp.get_json()['error']
    assert len(client.get('/api/customers').get_json()) == 1


def test_validation_errors_list_fields():
    client = setup_app().test_client()
    resp = client.post('/api/customers', json={'name': '', 'email': 'nope'})
    assert resp.status_code == 400
    body = resp.get_json()
    assert body['error'] == 'Invalid data'
    fields = {d['field'] for d in body['details']}
    assert {'name', 'email', 'phone', 'address'} <= fields


def test_missing_customer_is_404():
    client = setup_app().test_client()
    resp = client.get('/api/customers/12')
    assert resp.status_code == 404
    assert resp.get_json() == {'error': 'Customer not found'}


def test_patch_customer():
    client = setup_app().test_client()
    client.post('/api/customers', json=CUSTOMER)
    client.post('/api/customers', json=dict(CUSTOMER, email='b@x.com'))

    resp = client.patch('/api/customers/1', json={'phone': '777'})
    assert resp.status_code == 200
    assert resp.get_json()['phone'] == '777'
    assert resp.get_json()['email'] == 'a@x.com'

    resp = client.patch('/api/customers/1', json={'email': 'b@x.com'})
    assert resp.status_code == 409

    resp = client.patch('/api/customers/1', json={'id': 5})
    assert resp.status_code == 400

    assert client.patch('/api/customers/9', json={'phone': '1'}).status_code == 404


def test_customer_stats_endpoint():
    client = setup_app().test_client()
    resp = client.post('/api/quotes/request', json={
        'customerName': 'A', 'customerEmail': 'a@x.com', 'customerPhone': '555',
        'customerAddress': '1 Rd', 'projectType': 'lawn-care',
        'propertySize': 1000, 'description': 'test',
    })
    quote_id = resp.get_json()['quote']['id']
    client.post(f'/api/quotes/{quote_id}/approve', json={'amount': '250'})

    resp = client.get('/api/customers/1/stats')
    assert resp.status_code == 200
    assert resp.get_json() == {
        'customerId': 1,
        'totalQuotes': 1,
        'approvedQuotes': 1,
        'pendingQuotes': 0,
        'totalValue': '250.00',
    }
    assert client.get('/api/customers/2/stats').status_code == 404


def test_email_uniqueness_ignores_case():
    client = setup_app().test_client()
    resp = client.post('/api/customers', json=dict(CUSTOMER, email='A@X.com'))
    assert resp.get_json()['email'] == 'a@x.com'
    assert client.post('/api/customers', json=CUSTOMER).status_code == 409

    resp = client.post('/api/quotes/request', json={
        'customerName': 'A', 'customerEmail': 'a@X.COM', 'customerPhone': '555',
        'customerAddress': '1 Rd', 'projectType': 'lawn-care',
        'propertySize': 1000, 'description': 'test',
    })
    assert resp.get_json()['customer']['id'] == 1
    assert len(client.get('/api/customers').get_json()) == 1
