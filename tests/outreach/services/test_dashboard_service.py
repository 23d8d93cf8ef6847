"""Tests for outreach.services.dashboard and the audit activity feed."""
from datetime import datetime, timedelta, timezone

import pytest

from outreach.services.audit import record_action, describe_activity, recent_activity
from outreach.services.dashboard import dashboard_summary, time_since
from outreach.models.message import Message
from outreach.models.reply import Reply


class TestTimeSince:

    @pytest.mark.parametrize('delta,expected', [
        (timedelta(seconds=10), 'just now'),
        (timedelta(minutes=5), '5m ago'),
        (timedelta(hours=3), '3h ago'),
        (timedelta(days=2), '2d ago'),
    ])
    def test_buckets(self, delta, expected):
        now = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)
        assert time_since((now - delta).isoformat(), now=now) == expected

    def test_empty_and_garbage(self):
        assert time_since(None) == ''
        assert time_since('not a date') == ''

    def test_naive_timestamp_treated_as_utc(self):
        now = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)
        assert time_since('2026-05-01T11:00:00', now=now) == '1h ago'


class TestDescribeActivity:

    def test_sentences(self):
        assert describe_activity('Campaign Created', {'name': 'Spring'}, 'Ana') == \
            'Ana created the campaign "Spring"'
        assert describe_activity('Page Analyzed', {'page_name': 'Cafe'}, 'Ana') == \
            'Ana analyzed the page "Cafe"'
        assert describe_activity('Draft Approved', {}, 'Ana') == 'Ana approved a draft.'
        assert describe_activity('Draft Rejected', {}, None) == 'A user rejected a draft.'
        assert describe_activity('Message Sent', {'page_name': 'Cafe'}, 'Ana') == \
            'A message was sent to "Cafe"'

    def test_unknown_action_falls_back_to_name(self):
        assert describe_activity('Settings Updated', {}, 'Ana') == 'Settings Updated'


class TestDashboardSummary:

    def test_counts_and_activity(self, db_session, make_user, make_analysis):
        user = make_user(name='Ana')
        analysis = make_analysis(user)
        from outreach.services.proposals import create_proposal
        draft = create_proposal(analysis.id, user.id)
        message = Message(draft_id=draft['id'], page_id=analysis.page_id, platform='email', status='sent')
        db_session.add(message)
        db_session.flush()
        db_session.add(Reply(message_id=message.id, page_id=analysis.page_id, platform='email', content='Yes!'))
        for i in range(9):
            record_action(db_session, user.id, 'Page Analyzed', 'page', analysis.page_id, {'page_name': f'P{i}'})
        db_session.commit()

        summary = dashboard_summary()
        assert summary['stats'] == {
            'analyzed_pages': 1, 'proposals_sent': 1, 'replies': 1, 'conversions': 0,
        }
        assert len(summary['activities']) == 7
        latest = summary['activities'][0]
        assert latest['text'] == 'Ana analyzed the page "P8"'
        assert latest['user'] == {'name': 'Ana'}
        assert latest['time_since']

    def test_recent_activity_without_actor(self, db_session):
        record_action(db_session, None, 'Draft Approved')
        db_session.commit()
        [entry] = recent_activity()
        assert entry['user'] is None
        assert entry['text'] == 'A user approved a draft.'
