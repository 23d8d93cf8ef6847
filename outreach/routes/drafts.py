"""
Draft routes — review queue, editing, approval workflow and campaign assignment.
"""
import logging

from flask import Blueprint, g, request, jsonify

from outreach.auth import can_moderate, require_capability
from outreach.errors import ValidationError
from outreach.services.drafts import list_drafts, get_draft, save_draft, apply_action, assign_campaign
from outreach.workflow import DRAFT_WORKFLOW

logger = logging.getLogger('routes.drafts')

bp = Blueprint('drafts', __name__)

MODERATOR_ONLY = 'Only moderators and admins can review drafts'


@bp.route('/api/drafts')
def drafts_list():
    status = request.args.get('status', 'pending')
    campaign_id = request.args.get('campaign_id', type=int)
    return jsonify(list_drafts(status=status, campaign_id=campaign_id))


@bp.route('/api/drafts/<int:draft_id>')
def draft_detail(draft_id):
    return jsonify(get_draft(draft_id))


@bp.route('/api/drafts/<int:draft_id>', methods=['PUT', 'PATCH'])
@require_capability(can_moderate, MODERATOR_ONLY)
def draft_save(draft_id):
    data = request.get_json(silent=True) or {}
    return jsonify(save_draft(draft_id, data, g.user))


@bp.route('/api/drafts/<int:draft_id>/<action>', methods=['POST'])
@require_capability(can_moderate, MODERATOR_ONLY)
def draft_action(draft_id, action):
    if action not in DRAFT_WORKFLOW.actions:
        raise ValidationError(f'Unknown action: {action}')
    return jsonify(apply_action(draft_id, action, g.user))


@bp.route('/api/drafts/<int:draft_id>/campaign', methods=['PUT'])
def draft_assign(draft_id):
    data = request.get_json(silent=True) or {}
    campaign_id = data.get('campaign_id')
    if campaign_id in ('', None):
        campaign_id = None
    else:
        try:
            campaign_id = int(campaign_id)
        except (TypeError, ValueError):
            raise ValidationError('campaign_id must be an integer')
    return jsonify(assign_campaign(draft_id, campaign_id, g.user))
