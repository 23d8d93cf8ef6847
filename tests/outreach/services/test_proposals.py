"""Tests for outreach.services.proposals — template text and draft creation."""
import pytest

from outreach.config import AGENCY_SIGNATURE
from outreach.errors import NotFoundError, ValidationError
from outreach.models.draft import Draft
from outreach.services.proposals import build_proposal, create_proposal, list_ready_analyses


class TestBuildProposal:

    def test_uses_first_issue_without_trailing_period(self):
        message, subject, body = build_proposal('Testpage', [
            {'description': 'Logo is blurry.'},
            {'description': 'Second issue.'},
        ])
        assert message == (
            'Hi Testpage, I checked your Facebook page and noticed some issues regarding '
            'Logo is blurry. I can share one free concept for you to review, no obligations. Interested?'
        )
        assert subject == 'A design idea for Testpage'

    def test_fallback_issue_text(self):
        message, _, _ = build_proposal('Cafe', [])
        assert 'regarding design inconsistencies.' in message

    def test_body_is_message_plus_signature(self):
        message, _, body = build_proposal('Cafe', None)
        assert body == f'{message}<br><br>Best,<br>{AGENCY_SIGNATURE}'


class TestCreateProposal:

    def test_creates_pending_version_one_draft(self, db_session, make_user, make_analysis):
        user = make_user()
        analysis = make_analysis(user, name='Corner Shop')
        data = create_proposal(analysis.id, user.id)

        assert data['status'] == 'pending'
        assert data['version'] == 1
        assert data['analysis_id'] == analysis.id
        assert data['created_by'] == user.id
        assert data['fb_message'].startswith('Hi Corner Shop,')
        assert data['email_subject'] == 'A design idea for Corner Shop'
        assert db_session.query(Draft).count() == 1

    def test_second_draft_for_same_analysis_rejected(self, db_session, make_user, make_analysis):
        user = make_user()
        analysis = make_analysis(user)
        create_proposal(analysis.id, user.id)
        with pytest.raises(ValidationError):
            create_proposal(analysis.id, user.id)
        assert db_session.query(Draft).count() == 1

    def test_missing_analysis(self, make_user):
        user = make_user()
        with pytest.raises(NotFoundError):
            create_proposal(12345, user.id)

    def test_requires_ids(self):
        with pytest.raises(ValidationError):
            create_proposal(None, 'u1')


class TestReadyAnalyses:

    def test_only_yes_and_maybe_without_draft(self, make_user, make_analysis):
        user = make_user()
        needs = make_analysis(user, score=50, name='Needs Help')
        could = make_analysis(user, score=70, name='Could Improve')
        make_analysis(user, score=95, name='Fine Already')
        drafted = make_analysis(user, score=40, name='Drafted')
        create_proposal(drafted.id, user.id)

        ready = list_ready_analyses()
        assert [r['id'] for r in ready] == [could.id, needs.id]
        assert ready[0]['pages']['name'] == 'Could Improve'
