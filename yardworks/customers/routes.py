# yardworks/customers/routes.py

from flask import Blueprint, jsonify, request

from yardworks import get_store
from yardworks.customers.utils import create_customer, get_customer_or_404, update_customer
from yardworks.errors import failure_message
from yardworks.reports.stats import customer_stats
from yardworks.schemas import CustomerCreate, CustomerUpdate

bp = Blueprint('customers', __name__)


@bp.route('', methods=['GET'])
@failure_message('Failed to fetch customers')
def list_customers():
    return jsonify([c.to_dict() for c in get_store().list_customers()])


@bp.route('/<int:customer_id>', methods=['GET'])
@failure_message('Failed to fetch customer')
def get_customer(customer_id):
    return jsonify(get_customer_or_404(get_store(), customer_id).to_dict())


@bp.route('', methods=['POST'])
@failure_message('Failed to create customer')
def post_customer():
    payload = CustomerCreate.model_validate(request.get_json(silent=True) or {})
    customer = create_customer(get_store(), payload)
    return jsonify(customer.to_dict()), 201


@bp.route('/<int:customer_id>', methods=['PATCH'])
@failure_message('Failed to update customer')
def patch_customer(customer_id):
    payload = CustomerUpdate.model_validate(request.get_json(silent=True) or {})
    customer = update_customer(get_store(), customer_id, payload)
    return jsonify(customer.to_dict())


@bp.route('/<int:customer_id>/stats', methods=['GET'])
@failure_message('Failed to fetch customer stats')
def get_customer_stats(customer_id):
    store = get_store()
    get_customer_or_404(store, customer_id)
    return jsonify(customer_stats(store, customer_id))
