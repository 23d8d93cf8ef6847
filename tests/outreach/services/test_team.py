"""Tests for outreach.services.team — roster actions and privileged deletion."""
import pytest

from outreach.errors import InvalidTransition, NotFoundError, PermissionDenied, ValidationError
from outreach.models.audit_log import AuditLog
from outreach.models.user import AuthIdentity, User
from outreach.services.team import (
    list_team, change_status, change_role, delete_user, reject_user,
)


@pytest.fixture
def admin(make_user):
    return make_user(role='admin', name='Boss')


class TestListTeam:

    def test_lists_every_member(self, make_user):
        active = make_user()
        pending = make_user(status='pending_approval')
        team = {u['id']: u for u in list_team()}
        assert team[active.id]['status'] == 'active'
        assert team[pending.id]['status'] == 'pending_approval'


class TestStatusActions:

    def test_approve_pending(self, db_session, admin, make_user):
        pending = make_user(status='pending_approval')
        assert change_status(pending.id, 'approve', admin)['status'] == 'active'
        entry = db_session.query(AuditLog).filter_by(action='User Approved').one()
        assert entry.entity_id == pending.id

    def test_ban_and_unban(self, admin, make_user):
        member = make_user()
        assert change_status(member.id, 'ban', admin)['status'] == 'banned'
        assert change_status(member.id, 'unban', admin)['status'] == 'active'

    def test_invalid_transition_leaves_row(self, db_session, admin, make_user):
        member = make_user()
        with pytest.raises(InvalidTransition):
            change_status(member.id, 'unban', admin)
        assert db_session.get(User, member.id).status == 'active'

    def test_cannot_act_on_self(self, admin):
        with pytest.raises(PermissionDenied):
            change_status(admin.id, 'ban', admin)

    def test_non_admin_forbidden(self, make_user):
        moderator = make_user(role='moderator')
        with pytest.raises(PermissionDenied):
            change_status(make_user().id, 'ban', moderator)

    def test_unknown_action(self, admin, make_user):
        with pytest.raises(ValidationError):
            change_status(make_user().id, 'promote', admin)

    def test_missing_user(self, admin):
        with pytest.raises(NotFoundError):
            change_status('nope', 'ban', admin)


class TestRoles:

    def test_change_role_on_active_user(self, db_session, admin, make_user):
        member = make_user()
        assert change_role(member.id, 'moderator', admin)['role'] == 'moderator'
        entry = db_session.query(AuditLog).filter_by(action='User Role Changed').one()
        assert entry.details['from'] == 'analyst'
        assert entry.details['to'] == 'moderator'

    def test_role_must_be_known(self, admin, make_user):
        with pytest.raises(ValidationError):
            change_role(make_user().id, 'superuser', admin)

    def test_inactive_user_role_unchanged(self, db_session, admin, make_user):
        member = make_user(status='banned')
        with pytest.raises(ValidationError):
            change_role(member.id, 'admin', admin)
        assert db_session.get(User, member.id).role == 'analyst'


class TestDeleteUser:

    def test_deleting_pending_user_removes_profile_and_identity(self, db_session, admin, make_user):
        pending = make_user(status='pending_approval')
        result = delete_user(pending.id, admin)
        assert pending.id in result['message']
        assert db_session.get(User, pending.id) is None
        assert db_session.get(AuthIdentity, pending.id) is None
        assert db_session.query(AuditLog).filter_by(action='User Deleted').count() == 1

    def test_non_admin_caller_forbidden(self, db_session, make_user):
        moderator = make_user(role='moderator')
        target = make_user()
        with pytest.raises(PermissionDenied) as exc:
            delete_user(target.id, moderator)
        assert exc.value.status_code == 403
        assert db_session.get(User, target.id) is not None

    def test_requires_id(self, admin):
        with pytest.raises(ValidationError):
            delete_user(None, admin)

    def test_cannot_delete_self(self, admin):
        with pytest.raises(PermissionDenied):
            delete_user(admin.id, admin)

    def test_reject_pending_deletes(self, db_session, admin, make_user):
        pending = make_user(status='pending_approval')
        reject_user(pending.id, admin)
        assert db_session.get(User, pending.id) is None
        assert db_session.get(AuthIdentity, pending.id) is None

    def test_reject_active_user_is_invalid(self, db_session, admin, make_user):
        member = make_user()
        with pytest.raises(InvalidTransition):
            reject_user(member.id, admin)
        assert db_session.get(User, member.id) is not None
