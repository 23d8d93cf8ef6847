"""
Session/identity gate.

sign_in / sign_up / sign_out operate on the Flask session; load_current_user()
runs before every request and puts a CurrentUser (or None) on flask.g.
Capabilities are predicates over (role, status) so views check access once.
"""
import logging
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from functools import wraps

from flask import g, session as flask_session
from sqlalchemy.exc import IntegrityError
from werkzeug.security import generate_password_hash, check_password_hash

from outreach.database import get_session
from outreach.errors import AuthError, PermissionDenied, ValidationError
from outreach.models.user import AuthIdentity, User

logger = logging.getLogger('outreach.auth')

SESSION_KEY = 'user_id'


@dataclass
class CurrentUser:
    id: str
    email: str
    name: str
    role: str
    status: str

    @classmethod
    def from_model(cls, user):
        return cls(id=user.id, email=user.email, name=user.name or '',
                   role=user.role, status=user.status)

    def to_dict(self):
        return asdict(self)


# ── Capabilities ─────────────────────────────────────────────────────────────

def is_active(user):
    return user is not None and user.status == 'active'


def can_moderate(user):
    """Edit drafts and move them through approve / reject / send."""
    return is_active(user) and user.role in ('moderator', 'admin')


def can_manage(user):
    """Settings, team roster, campaign status and deletion."""
    return is_active(user) and user.role == 'admin'


def require_capability(predicate, message='Not authorized'):
    """Route decorator: 403 unless predicate(g.user) holds."""
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if not predicate(g.get('user')):
                raise PermissionDenied(message)
            return view(*args, **kwargs)
        return wrapper
    return decorator


# ── Sign in / up / out ───────────────────────────────────────────────────────

def sign_in(email, password):
    """Verify credentials and account status, then start a session."""
    email = email.strip().lower() if isinstance(email, str) else ''
    if not email or not password or not isinstance(password, str):
        raise ValidationError('Email and password are required')

    db = get_session()
    try:
        identity = db.query(AuthIdentity).filter_by(email=email).first()
        if identity is None or not check_password_hash(identity.password_hash, password):
            raise AuthError('Invalid login credentials')

        profile = db.get(User, identity.id)
        if profile is None:
            sign_out()
            raise AuthError('Could not fetch user profile. Please contact support.')
        if profile.status == 'banned':
            sign_out()
            raise AuthError('Your account has been banned. Please contact an admin.')
        if profile.status != 'active':
            sign_out()
            raise AuthError('Your account is pending admin approval. Please wait.')

        profile.last_login_at = datetime.now(timezone.utc)
        db.commit()
        user = CurrentUser.from_model(profile)
    except AuthError:
        db.rollback()
        raise
    except Exception:
        db.rollback()
        logger.error("Sign-in failed for %s", email, exc_info=True)
        raise
    finally:
        db.close()

    flask_session.clear()
    flask_session[SESSION_KEY] = user.id
    g.user = user
    logger.info("User %s signed in", user.id)
    return user


def sign_up(email, password, name):
    """
    Create the login identity only.

    The profile row is written by the AuthIdentity insert hook with status
    pending_approval; an admin has to approve it before sign-in succeeds.
    """
    email = email.strip().lower() if isinstance(email, str) else ''
    name = name.strip() if isinstance(name, str) else ''
    if not email or not password or not isinstance(password, str):
        raise ValidationError('Email and password are required')
    if '@' not in email:
        raise ValidationError('Sign up failed: invalid email address')
    if len(password) < 6:
        raise ValidationError('Sign up failed: password should be at least 6 characters')

    db = get_session()
    try:
        identity = AuthIdentity(
            email=email,
            password_hash=generate_password_hash(password),
            user_metadata={'name': name},
        )
        db.add(identity)
        db.commit()
        identity_id = identity.id
    except IntegrityError:
        db.rollback()
        raise AuthError('Sign up failed: user already registered', status_code=409)
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

    logger.info("New sign-up %s awaiting approval", identity_id)

    from outreach.services.notifications import notify_signup_pending
    notify_signup_pending(email, name)
    return {'id': identity_id, 'email': email, 'name': name, 'status': 'pending_approval'}


def sign_out():
    flask_session.clear()
    g.user = None


def load_current_user():
    """
    Resolve the session's user id to an active profile.

    A missing profile, a lookup error, or a non-active status all mean
    "no user" and clear the session so the client is forced to sign in again.
    """
    g.user = None
    user_id = flask_session.get(SESSION_KEY)
    if not user_id:
        return None

    db = get_session()
    try:
        profile = db.get(User, user_id)
        user = CurrentUser.from_model(profile) if profile is not None else None
    except Exception:
        logger.error("Error loading user profile %s", user_id, exc_info=True)
        user = None
    finally:
        db.close()

    if not is_active(user):
        flask_session.clear()
        return None

    g.user = user
    return user
