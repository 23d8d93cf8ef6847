"""
Analysis routes — page intake, history and proposal generation.
"""
import logging

from flask import Blueprint, g, request, jsonify

from outreach.services.pages import analyze_page, list_history, get_analysis, delete_analysis
from outreach.services.proposals import list_ready_analyses, create_proposal

logger = logging.getLogger('routes.analysis')

bp = Blueprint('analysis', __name__)


@bp.route('/api/analyses', methods=['POST'])
def analyze():
    """Analyze one Facebook page URL."""
    data = request.get_json(silent=True) or {}
    result = analyze_page(data.get('url'), g.user, page_name=data.get('name'))
    return jsonify(result), 201


@bp.route('/api/analyses')
def history():
    return jsonify(list_history(g.user.id))


@bp.route('/api/analyses/ready')
def ready():
    """Analyses recommending outreach that have no draft yet."""
    return jsonify(list_ready_analyses())


@bp.route('/api/analyses/<int:analysis_id>')
def detail(analysis_id):
    return jsonify(get_analysis(analysis_id))


@bp.route('/api/analyses/<int:analysis_id>', methods=['DELETE'])
def delete(analysis_id):
    return jsonify(delete_analysis(analysis_id, g.user))


@bp.route('/api/analyses/<int:analysis_id>/proposal', methods=['POST'])
def generate_proposal(analysis_id):
    draft = create_proposal(analysis_id, g.user.id)
    return jsonify(draft), 201
