"""
Dashboard routes — health checks, headline stats and the activity feed.
"""
import logging

from flask import Blueprint, jsonify

from outreach.auth import can_manage, require_capability
from outreach.errors import NotFoundError
from outreach.services.circuit_breaker import get_all_breakers
from outreach.services.dashboard import dashboard_summary

logger = logging.getLogger('routes.dashboard')

bp = Blueprint('dashboard', __name__)


@bp.route('/health')
def health_check():
    """Simple health check endpoint."""
    return jsonify({"status": "healthy"}), 200


@bp.route('/api/dashboard')
def get_dashboard():
    return jsonify(dashboard_summary())


@bp.route('/api/health')
def service_health():
    """Circuit breaker state for every remote procedure."""
    breakers = get_all_breakers()
    return jsonify({name: cb.get_health() for name, cb in sorted(breakers.items())})


@bp.route('/api/health/<service>/reset', methods=['POST'])
@require_capability(can_manage, 'Only admins can reset circuit breakers')
def reset_breaker(service):
    breaker = get_all_breakers().get(service)
    if breaker is None:
        raise NotFoundError('Service', service)
    breaker.reset()
    logger.info("Circuit '%s' reset from dashboard", service)
    return jsonify(breaker.get_health())
