"""
Campaign routes.
"""
from flask import Blueprint, g, request, jsonify

from outreach.auth import can_manage, require_capability
from outreach.services.campaigns import (
    list_campaigns, create_campaign, set_campaign_status, delete_campaign, campaign_detail,
)

bp = Blueprint('campaigns', __name__)

ADMIN_ONLY = 'Only admins can change or delete campaigns'


@bp.route('/api/campaigns')
def campaigns_list():
    return jsonify(list_campaigns(status=request.args.get('status')))


@bp.route('/api/campaigns', methods=['POST'])
def campaigns_create():
    data = request.get_json(silent=True) or {}
    campaign = create_campaign(data.get('name'), data.get('description'), g.user)
    return jsonify(campaign), 201


@bp.route('/api/campaigns/<int:campaign_id>')
def campaigns_detail(campaign_id):
    return jsonify(campaign_detail(campaign_id))


@bp.route('/api/campaigns/<int:campaign_id>/status', methods=['POST'])
@require_capability(can_manage, ADMIN_ONLY)
def campaigns_status(campaign_id):
    data = request.get_json(silent=True) or {}
    return jsonify(set_campaign_status(campaign_id, data.get('status'), g.user))


@bp.route('/api/campaigns/<int:campaign_id>', methods=['DELETE'])
@require_capability(can_manage, ADMIN_ONLY)
def campaigns_delete(campaign_id):
    return jsonify(delete_campaign(campaign_id, g.user))
