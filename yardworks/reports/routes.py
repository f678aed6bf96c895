# yardworks/reports/routes.py

from flask import Blueprint, jsonify, request

from yardworks import get_store
from yardworks.errors import failure_message
from yardworks.reports.stats import calendar_view, dashboard_stats, report_metrics

bp = Blueprint('reports', __name__)


@bp.route('/dashboard/stats')
@failure_message('Failed to fetch dashboard stats')
def dashboard_stats_view():
    return jsonify(dashboard_stats(get_store()))


@bp.route('/reports/metrics')
@failure_message('Failed to fetch report metrics')
def report_metrics_view():
    return jsonify(report_metrics(get_store()))


@bp.route('/calendar')
@failure_message('Failed to fetch calendar')
def calendar():
    """Quotes by requested day; ``?year=`` and ``?month=`` narrow the range."""
    year = request.args.get('year', type=int)
    month = request.args.get('month', type=int)
    return jsonify(calendar_view(get_store(), year=year, month=month))
