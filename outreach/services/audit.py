"""
Audit trail — append-only action log plus the dashboard's activity feed.
"""
import logging

from outreach.database import get_session
from outreach.models.audit_log import AuditLog
from outreach.models.user import User

logger = logging.getLogger('services.audit')


def record_action(session, user_id, action, entity_type=None, entity_id=None, details=None):
    """
    Stage an audit entry on the caller's session.

    It commits (or rolls back) together with the mutation it describes.
    """
    entry = AuditLog(
        user_id=user_id,
        action=action,
        entity_type=entity_type,
        entity_id=str(entity_id) if entity_id is not None else None,
        details=details or {},
    )
    session.add(entry)
    return entry


def describe_activity(action, details, user_name):
    """One human sentence per audit entry."""
    details = details or {}
    actor = user_name or 'A user'
    if action == 'Campaign Created':
        return f'{actor} created the campaign "{details.get("name") or "Untitled"}"'
    if action == 'Page Analyzed':
        return f'{actor} analyzed the page "{details.get("page_name") or "a page"}"'
    if action == 'Draft Approved':
        return f'{actor} approved a draft.'
    if action == 'Draft Rejected':
        return f'{actor} rejected a draft.'
    if action == 'Message Sent':
        return f'A message was sent to "{details.get("page_name") or "a page"}"'
    return action


def recent_activity(limit=7):
    """Latest audit entries with the actor's display name."""
    session = get_session()
    try:
        rows = (
            session.query(AuditLog, User.name)
            .outerjoin(User, User.id == AuditLog.user_id)
            .order_by(AuditLog.timestamp.desc(), AuditLog.id.desc())
            .limit(limit)
            .all()
        )
        return [
            {
                'id': entry.id,
                'action': entry.action,
                'entity_type': entry.entity_type,
                'entity_id': entry.entity_id,
                'details': entry.details or {},
                'timestamp': entry.timestamp.isoformat() if entry.timestamp else None,
                'user': {'name': name} if name else None,
                'text': describe_activity(entry.action, entry.details, name),
            }
            for entry, name in rows
        ]
    finally:
        session.close()
