"""Tests for outreach.services.messages — the message center listing."""
from outreach.models.message import Message
from outreach.models.reply import Reply
from outreach.services.drafts import apply_action
from outreach.services.messages import list_messages
from outreach.services.proposals import create_proposal


class TestListMessages:

    def test_empty(self):
        assert list_messages() == []

    def test_message_with_page_draft_and_replies(self, db_session, make_user, make_analysis):
        moderator = make_user(role='moderator')
        analysis = make_analysis(moderator, name='Cafe Luna')
        draft = create_proposal(analysis.id, moderator.id)
        apply_action(draft['id'], 'approve', moderator)
        sent = apply_action(draft['id'], 'send', moderator)['message']

        db_session.add(Reply(message_id=sent['id'], page_id=analysis.page_id, platform='email',
                             content='Sounds good', classification='positive'))
        db_session.commit()

        [message] = list_messages()
        assert message['id'] == sent['id']
        assert message['pages'] == {'name': 'Cafe Luna'}
        assert message['drafts']['email_subject'] == 'A design idea for Cafe Luna'
        assert [r['content'] for r in message['replies']] == ['Sounds good']

    def test_newest_first(self, db_session, make_user, make_analysis):
        user = make_user()
        a = make_analysis(user, name='A Page')
        b = make_analysis(user, name='B Page')
        draft_a = create_proposal(a.id, user.id)
        draft_b = create_proposal(b.id, user.id)
        first = Message(draft_id=draft_a['id'], page_id=a.page_id, platform='email', status='sent')
        second = Message(draft_id=draft_b['id'], page_id=b.page_id, platform='facebook', status='sent')
        db_session.add_all([first, second])
        db_session.commit()

        assert [m['pages']['name'] for m in list_messages()] == ['B Page', 'A Page']
        assert all(m['replies'] == [] for m in list_messages())
