"""
Team management — roster, status/role changes and account deletion.

Every action is admin-only and never applies to the acting admin's own row.
Writes are transactional: on failure the roster stays as it was.
"""
import logging

from outreach.config import ROLES
from outreach.database import get_session
from outreach.errors import NotFoundError, PermissionDenied, ValidationError
from outreach.models.user import AuthIdentity, User
from outreach.services.audit import record_action
from outreach.workflow import USER_WORKFLOW

logger = logging.getLogger('services.team')

STATUS_AUDIT_ACTIONS = {
    'approve': 'User Approved',
    'ban': 'User Banned',
    'unban': 'User Unbanned',
}


def _check_actor(actor, target_id):
    if actor is None or actor.role != 'admin' or actor.status != 'active':
        raise PermissionDenied('Not authorized. Only admins can manage the team.')
    if actor.id == target_id:
        raise PermissionDenied('You cannot change your own account')


def list_team():
    session = get_session()
    try:
        users = session.query(User).order_by(User.created_at.desc(), User.email).all()
        return [u.to_dict() for u in users]
    finally:
        session.close()


def change_status(user_id, action, actor):
    """approve / ban / unban; reject is handled by reject_user()."""
    if action not in STATUS_AUDIT_ACTIONS:
        raise ValidationError(f'Unknown action: {action}')
    _check_actor(actor, user_id)

    session = get_session()
    try:
        member = session.get(User, user_id)
        if member is None:
            raise NotFoundError('User', user_id)
        member.status = USER_WORKFLOW.next_status(member.status, action)
        record_action(session, actor.id, STATUS_AUDIT_ACTIONS[action], 'user', user_id, {
            'name': member.name, 'status': member.status,
        })
        session.commit()
        logger.info("User %s %s by %s", user_id, action, actor.id)
        return member.to_dict()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def change_role(user_id, role, actor):
    """Role changes apply to active members only."""
    if role not in ROLES:
        raise ValidationError(f'Unknown role: {role}')
    _check_actor(actor, user_id)

    session = get_session()
    try:
        member = session.get(User, user_id)
        if member is None:
            raise NotFoundError('User', user_id)
        if member.status != 'active':
            raise ValidationError('Only active users can change role')
        previous = member.role
        member.role = role
        record_action(session, actor.id, 'User Role Changed', 'user', user_id, {
            'name': member.name, 'from': previous, 'to': role,
        })
        session.commit()
        logger.info("User %s role %s → %s by %s", user_id, previous, role, actor.id)
        return member.to_dict()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def delete_user(user_id_to_delete, actor):
    """
    Privileged deletion: profile row first, then the login identity.

    Both go in one transaction so a pending sign-up never leaves an orphaned
    profile behind.
    """
    if not user_id_to_delete:
        raise ValidationError('user_id_to_delete is required.')
    _check_actor(actor, user_id_to_delete)

    session = get_session()
    try:
        member = session.get(User, user_id_to_delete)
        identity = session.get(AuthIdentity, user_id_to_delete)
        if member is None and identity is None:
            raise NotFoundError('User', user_id_to_delete)
        name = member.name if member is not None else None
        if member is not None:
            session.delete(member)
            session.flush()
        if identity is not None:
            session.delete(identity)
        record_action(session, actor.id, 'User Deleted', 'user', user_id_to_delete, {'name': name})
        session.commit()
        logger.info("User %s deleted by %s", user_id_to_delete, actor.id)
        return {'message': f'User {user_id_to_delete} deleted successfully.'}
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def reject_user(user_id, actor):
    """Reject a pending sign-up, which deletes the account outright."""
    _check_actor(actor, user_id)
    session = get_session()
    try:
        member = session.get(User, user_id)
        if member is None:
            raise NotFoundError('User', user_id)
        USER_WORKFLOW.next_status(member.status, 'reject')
    finally:
        session.close()
    return delete_user(user_id, actor)
