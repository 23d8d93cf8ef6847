"""
Settings routes — system settings and team management, admin only.
"""
import logging

from flask import Blueprint, g, request, jsonify

from outreach.auth import can_manage, require_capability
from outreach.errors import ValidationError
from outreach.services.settings import list_settings, save_settings
from outreach.services.team import list_team, change_status, change_role, delete_user, reject_user

logger = logging.getLogger('routes.settings')

bp = Blueprint('settings', __name__)

ADMIN_ONLY = 'Not authorized. Only admins can manage settings.'


# ── System settings ──────────────────────────────────────────────────────────

@bp.route('/api/settings')
@require_capability(can_manage, ADMIN_ONLY)
def settings_list():
    return jsonify(list_settings())


@bp.route('/api/settings', methods=['PUT'])
@require_capability(can_manage, ADMIN_ONLY)
def settings_save():
    data = request.get_json(silent=True) or {}
    return jsonify(save_settings(data, g.user))


# ── Team ─────────────────────────────────────────────────────────────────────

@bp.route('/api/team')
@require_capability(can_manage, ADMIN_ONLY)
def team_list():
    return jsonify(list_team())


@bp.route('/api/team/<user_id>/<action>', methods=['POST'])
@require_capability(can_manage, ADMIN_ONLY)
def team_action(user_id, action):
    if action == 'reject':
        return jsonify(reject_user(user_id, g.user))
    if action not in ('approve', 'ban', 'unban'):
        raise ValidationError(f'Unknown action: {action}')
    return jsonify(change_status(user_id, action, g.user))


@bp.route('/api/team/<user_id>/role', methods=['PUT'])
@require_capability(can_manage, ADMIN_ONLY)
def team_role(user_id):
    data = request.get_json(silent=True) or {}
    return jsonify(change_role(user_id, data.get('role'), g.user))


@bp.route('/api/team/<user_id>', methods=['DELETE'])
@require_capability(can_manage, ADMIN_ONLY)
def team_delete(user_id):
    return jsonify(delete_user(user_id, g.user))
