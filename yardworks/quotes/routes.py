# yardworks/quotes/routes.py

from flask import Blueprint, current_app, jsonify, render_template, request

from yardworks import get_store
from yardworks.errors import NotFoundError, failure_message
from yardworks.quotes.document import build_document
from yardworks.quotes.lifecycle import (
    add_item,
    approve_quote,
    get_quote_or_404,
    reject_quote,
    remove_item,
    request_quote,
    update_item,
    update_quote,
)
from yardworks.schemas import (
    ApproveRequest,
    QuoteItemCreate,
    QuoteItemPatch,
    QuotePatch,
    QuoteRequest,
)

bp = Blueprint('quotes', __name__)
pages_bp = Blueprint('quote_pages', __name__)


def _payload() -> dict:
    return request.get_json(silent=True) or {}


@bp.route('', methods=['GET'])
@failure_message('Failed to fetch quotes')
def list_quotes():
    """Optional ``?status=`` and ``?customerId=`` filters, combined with AND."""
    status = request.args.get('status') or None
    customer_id = request.args.get('customerId', type=int)

    def matches(q):
        if status is not None and q.status != status:
            return False
        if customer_id is not None and q.customer_id != customer_id:
            return False
        return True

    quotes = get_store().list_quotes_by(matches)
    return jsonify([q.to_dict() for q in quotes])


@bp.route('/<int:quote_id>', methods=['GET'])
@failure_message('Failed to fetch quote')
def get_quote(quote_id):
    return jsonify(get_quote_or_404(get_store(), quote_id).to_dict())


@bp.route('/number/<quote_number>', methods=['GET'])
@failure_message('Failed to fetch quote')
def get_quote_by_number(quote_number):
    quote = get_store().get_quote_by_number(quote_number)
    if quote is None:
        raise NotFoundError('Quote not found')
    return jsonify(quote.to_dict())


@bp.route('/request', methods=['POST'])
@failure_message('Failed to create quote request')
def post_quote_request():
    req = QuoteRequest.model_validate(_payload())
    quote, customer = request_quote(get_store(), req)
    return jsonify(quote=quote.to_dict(), customer=customer.to_dict()), 201


@bp.route('/<int:quote_id>', methods=['PATCH'])
@failure_message('Failed to update quote')
def patch_quote(quote_id):
    patch = QuotePatch.model_validate(_payload())
    quote = update_quote(get_store(), quote_id, patch.to_changes())
    return jsonify(quote.to_dict())


@bp.route('/<int:quote_id>/approve', methods=['POST'])
@failure_message('Failed to approve quote')
def approve(quote_id):
    body = ApproveRequest.model_validate(_payload())
    return jsonify(approve_quote(get_store(), quote_id, body.amount).to_dict())


@bp.route('/<int:quote_id>/reject', methods=['POST'])
@failure_message('Failed to reject quote')
def reject(quote_id):
    return jsonify(reject_quote(get_store(), quote_id).to_dict())


@bp.route('/<int:quote_id>/items', methods=['GET'])
@failure_message('Failed to fetch quote items')
def list_items(quote_id):
    return jsonify([i.to_dict() for i in get_store().list_quote_items(quote_id)])


@bp.route('/<int:quote_id>/items', methods=['POST'])
@failure_message('Failed to add quote item')
def post_item(quote_id):
    payload = QuoteItemCreate.model_validate(_payload())
    item = add_item(get_store(), quote_id, payload)
    return jsonify(item.to_dict()), 201


@bp.route('/<int:quote_id>/items/<int:item_id>', methods=['PATCH'])
@failure_message('Failed to update quote item')
def patch_item(quote_id, item_id):
    payload = QuoteItemPatch.model_validate(_payload())
    item = update_item(get_store(), quote_id, item_id, payload)
    return jsonify(item.to_dict())


@bp.route('/<int:quote_id>/items/<int:item_id>', methods=['DELETE'])
@failure_message('Failed to delete quote item')
def delete_item(quote_id, item_id):
    remove_item(get_store(), quote_id, item_id)
    return '', 204


@bp.route('/<int:quote_id>/document', methods=['GET'])
@failure_message('Failed to build quote document')
def quote_document(quote_id):
    return jsonify(build_document(get_store(), quote_id, current_app.config))


@pages_bp.route('/<int:quote_id>/print')
@failure_message('Failed to render quote')
def print_quote(quote_id):
    doc = build_document(get_store(), quote_id, current_app.config)
    return render_template('quotes/print.html', doc=doc)
