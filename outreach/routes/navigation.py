"""
Navigation routes — app shell page and the per-session view selector.
"""
from flask import Blueprint, g, request, jsonify, render_template_string

from outreach.navigation import visible_menu, current_view, select_view

bp = Blueprint('navigation', __name__)

SHELL_PAGE = '''
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Outreach Desk</title>
</head>
<body>
    <nav>
        <strong>Outreach Desk</strong> · {{ user.name or user.email }} ({{ user.role }})
        <ul>
        {% for item in menu %}
            <li{% if item.id == view %} class="active"{% endif %}>{{ item.label }}</li>
        {% endfor %}
        </ul>
        <a href="/logout">Log out</a>
    </nav>
    <main id="view" data-view="{{ view }}"></main>
</body>
</html>
'''


@bp.route('/')
def index():
    user = g.user
    return render_template_string(SHELL_PAGE, user=user, menu=visible_menu(user), view=current_view(user))


@bp.route('/api/navigation', methods=['GET', 'POST'])
def navigation():
    user = g.user
    if request.method == 'POST':
        data = request.get_json(silent=True) or {}
        select_view(user, data.get('view'))
    return jsonify({
        'menu': visible_menu(user),
        'current_view': current_view(user),
        'user': user.to_dict(),
    })
