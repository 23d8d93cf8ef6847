"""
Auth routes — HTML login/sign-up page plus the JSON auth API.
"""
import logging

from flask import Blueprint, g, request, jsonify, redirect, render_template_string

from outreach.auth import sign_in, sign_up, sign_out
from outreach.errors import AuthError, ServiceError

logger = logging.getLogger('routes.auth')

bp = Blueprint('auth', __name__)

LOGIN_PAGE = '''
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Login — Outreach Desk</title>
    <script src="https://cdn.tailwindcss.com"></script>
    <link href="https://fonts.googleapis.com/css2?family=DM+Sans:wght@400;500;600&display=swap" rel="stylesheet">
    <style>body { font-family: 'DM Sans', sans-serif; }</style>
</head>
<body class="min-h-screen flex items-center justify-center" style="background:#eeece1;">
    <div style="background:white;border-radius:12px;box-shadow:0 2px 8px rgba(0,0,0,0.06);padding:2.5rem;width:100%;max-width:360px;">
        <h1 class="text-lg font-bold mb-1" style="color:#005c69;">Outreach Desk</h1>
        <p class="text-sm mb-6" style="color:#3c4858;opacity:0.5;">
            {% if mode == 'signup' %}Create an account{% else %}Sign in to continue{% endif %}
        </p>
        {% if error %}
        <p class="text-xs mb-3" style="color:#f65c4e;">{{ error }}</p>
        {% endif %}
        {% if notice %}
        <p class="text-xs mb-3" style="color:#005c69;">{{ notice }}</p>
        {% endif %}
        <form method="POST" action="{{ '/signup' if mode == 'signup' else '/login' }}">
            {% if mode == 'signup' %}
            <input type="text" name="name" placeholder="Full name"
                   class="w-full rounded-lg px-3 py-2.5 text-sm mb-3 outline-none"
                   style="border:1px solid rgba(60,72,88,0.15);background:white;">
            {% endif %}
            <input type="email" name="email" autofocus placeholder="Email"
                   class="w-full rounded-lg px-3 py-2.5 text-sm mb-3 outline-none"
                   style="border:1px solid rgba(60,72,88,0.15);background:white;">
            <input type="password" name="password" placeholder="Password"
                   class="w-full rounded-lg px-3 py-2.5 text-sm mb-4 outline-none"
                   style="border:1px solid rgba(60,72,88,0.15);background:white;">
            <button type="submit" class="w-full rounded-lg py-2.5 text-sm font-medium text-white"
                    style="background:#005c69;cursor:pointer;">
                {% if mode == 'signup' %}Sign up{% else %}Log in{% endif %}
            </button>
        </form>
        <p class="text-xs mt-4" style="color:#3c4858;opacity:0.6;">
            {% if mode == 'signup' %}
            Already have an account? <a href="/login" style="color:#005c69;">Log in</a>
            {% else %}
            No account yet? <a href="/signup" style="color:#005c69;">Sign up</a>
            {% endif %}
        </p>
    </div>
</body>
</html>
'''


def _credentials():
    data = request.get_json(silent=True) if request.is_json else request.form
    data = data or {}
    return data.get('email'), data.get('password'), data.get('name')


# ── HTML pages ───────────────────────────────────────────────────────────────

@bp.route('/login', methods=['GET', 'POST'])
def login():
    if request.method == 'GET':
        if g.get('user') is not None:
            return redirect('/')
        return render_template_string(LOGIN_PAGE, mode='login', error=None, notice=None)

    email, password, _ = _credentials()
    try:
        user = sign_in(email, password)
    except ServiceError as e:
        if request.is_json:
            raise
        return render_template_string(LOGIN_PAGE, mode='login', error=e.message, notice=None), e.status_code
    if request.is_json:
        return jsonify({'user': user.to_dict()})
    return redirect('/')


@bp.route('/signup', methods=['GET', 'POST'])
def signup():
    if request.method == 'GET':
        return render_template_string(LOGIN_PAGE, mode='signup', error=None, notice=None)

    email, password, name = _credentials()
    try:
        result = sign_up(email, password, name)
    except ServiceError as e:
        if request.is_json:
            raise
        return render_template_string(LOGIN_PAGE, mode='signup', error=e.message, notice=None), e.status_code
    if request.is_json:
        return jsonify(result), 201
    return render_template_string(
        LOGIN_PAGE, mode='login', error=None,
        notice='Sign up successful! Your account is pending admin approval.',
    )


@bp.route('/logout', methods=['GET', 'POST'])
def logout():
    sign_out()
    return redirect('/login')


# ── JSON API ─────────────────────────────────────────────────────────────────

@bp.route('/api/auth/signin', methods=['POST'])
def api_signin():
    data = request.get_json(silent=True) or {}
    user = sign_in(data.get('email'), data.get('password'))
    return jsonify({'user': user.to_dict()})


@bp.route('/api/auth/signup', methods=['POST'])
def api_signup():
    data = request.get_json(silent=True) or {}
    result = sign_up(data.get('email'), data.get('password'), data.get('name'))
    return jsonify(result), 201


@bp.route('/api/auth/signout', methods=['POST'])
def api_signout():
    sign_out()
    return jsonify({'ok': True})


@bp.route('/api/auth/me')
def me():
    user = g.get('user')
    if user is None:
        raise AuthError('Not signed in')
    return jsonify({'user': user.to_dict()})
