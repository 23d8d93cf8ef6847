"""Tests for outreach.services.settings."""
import pytest

from outreach.errors import NotFoundError, ValidationError
from outreach.models.audit_log import AuditLog
from outreach.models.setting import Setting
from outreach.services.settings import (
    widget_for, coerce_value, list_settings, save_settings, ensure_default_settings,
)


@pytest.fixture
def seeded(db_session):
    ensure_default_settings(db_session)
    db_session.commit()


class TestWidgets:

    @pytest.mark.parametrize('key,widget', [
        ('moderator_approval_required', 'checkbox'),
        ('auto_approve_enabled', 'checkbox'),
        ('follow_up_delay_days', 'text'),
        ('daily_send_limit', 'number'),
        ('min_confidence_score', 'number'),
    ])
    def test_widget_for(self, key, widget):
        assert widget_for(key) == widget

    def test_checkbox_values(self):
        assert coerce_value('auto_approve_enabled', True) == 'true'
        assert coerce_value('auto_approve_enabled', 'FALSE') == 'false'
        with pytest.raises(ValidationError):
            coerce_value('auto_approve_enabled', 'maybe')

    def test_number_values(self):
        assert coerce_value('daily_send_limit', 75) == '75'
        with pytest.raises(ValidationError):
            coerce_value('daily_send_limit', 'lots')

    @pytest.mark.parametrize('value', [True, False, 'nan', 'inf', '-Infinity', float('nan')])
    def test_number_rejects_booleans_and_non_finite(self, value):
        with pytest.raises(ValidationError):
            coerce_value('daily_send_limit', value)

    def test_list_values(self):
        assert coerce_value('follow_up_delay_days', '[3, 7]') == '[3, 7]'
        with pytest.raises(ValidationError):
            coerce_value('follow_up_delay_days', '3, 7')
        with pytest.raises(ValidationError):
            coerce_value('follow_up_delay_days', '{"a": 1}')


class TestListAndSave:

    def test_defaults_seeded_once(self, db_session, seeded):
        assert ensure_default_settings(db_session) == 0
        assert db_session.query(Setting).count() == 5

    def test_list_ordered_by_key_with_widgets(self, seeded):
        rows = list_settings()
        assert [r['key'] for r in rows] == sorted(r['key'] for r in rows)
        by_key = {r['key']: r for r in rows}
        assert by_key['auto_approve_enabled']['widget'] == 'checkbox'
        assert by_key['follow_up_delay_days']['value'] == '[5, 12, 25]'
        assert by_key['daily_send_limit']['label'] == 'Daily Send Limit'

    def test_save_updates_and_audits(self, db_session, seeded, make_user):
        admin = make_user(role='admin')
        rows = save_settings({'daily_send_limit': '80', 'auto_approve_enabled': True}, admin)
        by_key = {r['key']: r for r in rows}
        assert by_key['daily_send_limit']['value'] == '80'
        assert by_key['auto_approve_enabled']['value'] == 'true'
        assert by_key['daily_send_limit']['updated_by'] == admin.id

        entry = db_session.query(AuditLog).filter_by(action='Settings Updated').one()
        assert entry.details == {'updated_keys': ['auto_approve_enabled', 'daily_send_limit']}

    def test_invalid_value_writes_nothing(self, db_session, seeded, make_user):
        admin = make_user(role='admin')
        with pytest.raises(ValidationError):
            save_settings({'daily_send_limit': '90', 'auto_approve_enabled': 'sometimes'}, admin)
        assert db_session.get(Setting, 'daily_send_limit').value == '50'

    def test_unknown_key(self, seeded, make_user):
        with pytest.raises(NotFoundError):
            save_settings({'no_such_key': '1'}, make_user(role='admin'))

    def test_empty_payload(self, make_user):
        with pytest.raises(ValidationError):
            save_settings({}, make_user(role='admin'))
