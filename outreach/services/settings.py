"""
Settings — key/value rows with a per-key input widget.

Values are stored as strings (JSON column, opaque to the database); the
widget decides what a valid value looks like.
"""
import json
import logging
import math
from datetime import datetime, timezone

from outreach.config import DEFAULT_SETTINGS
from outreach.database import get_session
from outreach.errors import NotFoundError, ValidationError
from outreach.models.setting import Setting
from outreach.services.audit import record_action

logger = logging.getLogger('services.settings')

CHECKBOX_KEYS = {'moderator_approval_required', 'auto_approve_enabled'}
LIST_KEYS = {'follow_up_delay_days'}


def widget_for(key):
    if key in CHECKBOX_KEYS:
        return 'checkbox'
    if key in LIST_KEYS:
        return 'text'
    return 'number'


def coerce_value(key, value):
    """Validate value against the key's widget and return its stored form."""
    widget = widget_for(key)
    if widget == 'checkbox':
        if isinstance(value, bool):
            return 'true' if value else 'false'
        if str(value).lower() in ('true', 'false'):
            return str(value).lower()
        raise ValidationError(f'{key} must be true or false')
    if widget == 'text':
        try:
            parsed = json.loads(value) if isinstance(value, str) else value
        except ValueError:
            raise ValidationError(f'{key} must be a JSON array, e.g. [5, 12, 25]')
        if not isinstance(parsed, list):
            raise ValidationError(f'{key} must be a JSON array, e.g. [5, 12, 25]')
        return json.dumps(parsed)
    if isinstance(value, bool):
        raise ValidationError(f'{key} must be a number')
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{key} must be a number')
    if not math.isfinite(number):
        raise ValidationError(f'{key} must be a finite number')
    return str(value)


def list_settings():
    session = get_session()
    try:
        rows = session.query(Setting).order_by(Setting.key).all()
        return [
            {
                'key': s.key,
                'value': s.value,
                'description': s.description,
                'widget': widget_for(s.key),
                'label': s.key.replace('_', ' ').title(),
                'updated_at': s.updated_at.isoformat() if s.updated_at else None,
                'updated_by': s.updated_by,
            }
            for s in rows
        ]
    finally:
        session.close()


def save_settings(values, user):
    """Update every key in values; unknown keys are rejected before any write."""
    if not isinstance(values, dict) or not values:
        raise ValidationError('No settings provided')

    coerced = {key: coerce_value(key, value) for key, value in values.items()}

    session = get_session()
    try:
        rows = {s.key: s for s in session.query(Setting).filter(Setting.key.in_(list(coerced)))}
        missing = sorted(set(coerced) - set(rows))
        if missing:
            raise NotFoundError('Setting', ', '.join(missing))

        now = datetime.now(timezone.utc)
        for key, value in coerced.items():
            rows[key].value = value
            rows[key].updated_at = now
            rows[key].updated_by = user.id

        record_action(session, user.id, 'Settings Updated', 'settings', None, {
            'updated_keys': sorted(coerced),
        })
        session.commit()
        logger.info("Settings %s updated by %s", sorted(coerced), user.id)
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
    return list_settings()


def ensure_default_settings(session):
    """Insert any DEFAULT_SETTINGS row that does not exist yet."""
    existing = {k for (k,) in session.query(Setting.key)}
    added = 0
    for key, value, description in DEFAULT_SETTINGS:
        if key not in existing:
            session.add(Setting(key=key, value=value, description=description))
            added += 1
    return added
