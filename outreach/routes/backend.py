"""
Backend procedure routes — the HTTP face of the in-process remote procedures.

Request and response bodies keep the camelCase keys browser clients send.
"""
import logging

from flask import Blueprint, g, request, jsonify

from outreach.errors import PermissionDenied
from outreach.services.chat import chat
from outreach.services.pages import analyze_page
from outreach.services.proposals import create_proposal
from outreach.services.team import delete_user

logger = logging.getLogger('routes.backend')

bp = Blueprint('backend', __name__)


@bp.route('/analyze', methods=['POST'])
def analyze():
    data = request.get_json(silent=True) or {}
    result = analyze_page(data.get('pageUrl'), g.user, page_name=data.get('pageName'))
    analysis = result['analysis']
    return jsonify({
        'id': analysis['id'],
        'overall_score': analysis['overall_score'],
        'issues': analysis['issues'],
        'suggestions': analysis['suggestions'],
        'need_decision': analysis['need_decision'],
        'rationale': analysis['rationale'],
        'metadata': result['metadata'],
    })


@bp.route('/create-proposal', methods=['POST'])
def proposal():
    data = request.get_json(silent=True) or {}
    user_id = data.get('userId') or g.user.id
    if user_id != g.user.id:
        raise PermissionDenied('Cannot create proposals on behalf of another user')
    return jsonify(create_proposal(data.get('analysisId'), user_id)), 201


@bp.route('/chat', methods=['POST'])
def mini_chat():
    data = request.get_json(silent=True) or {}
    return jsonify(chat(data.get('prompt')))


@bp.route('/delete-user', methods=['POST'])
def remove_user():
    data = request.get_json(silent=True) or {}
    return jsonify(delete_user(data.get('user_id_to_delete'), g.user))
