"""
Message center routes (read-only).
"""
from flask import Blueprint, jsonify

from outreach.services.messages import list_messages

bp = Blueprint('messages', __name__)


@bp.route('/api/messages')
def messages_list():
    return jsonify(list_messages())
