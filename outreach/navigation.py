"""
Navigation shell — fixed menu, one selected view per browser session.
"""
from flask import session as flask_session

from outreach.auth import can_manage
from outreach.errors import ValidationError

VIEW_KEY = 'current_view'
DEFAULT_VIEW = 'dashboard'

MENU_ITEMS = [
    {'id': 'dashboard', 'label': 'Dashboard'},
    {'id': 'analyze', 'label': 'Analyze Page'},
    {'id': 'history', 'label': 'Analysis History'},
    {'id': 'drafts', 'label': 'Drafts Queue'},
    {'id': 'campaigns', 'label': 'Campaigns'},
    {'id': 'messages', 'label': 'Message Center'},
    {'id': 'minichat', 'label': 'Mini Chat'},
    {'id': 'settings', 'label': 'Settings', 'admin_only': True},
]


def can_view(user, view_id):
    for item in MENU_ITEMS:
        if item['id'] == view_id:
            return not item.get('admin_only') or can_manage(user)
    return False


def visible_menu(user):
    return [
        {'id': item['id'], 'label': item['label']}
        for item in MENU_ITEMS
        if can_view(user, item['id'])
    ]


def current_view(user):
    view = flask_session.get(VIEW_KEY, DEFAULT_VIEW)
    # A role change can hide the stored view
    return view if can_view(user, view) else DEFAULT_VIEW


def select_view(user, view_id):
    if not can_view(user, view_id):
        raise ValidationError(f'Unknown view: {view_id}')
    flask_session[VIEW_KEY] = view_id
    return view_id
