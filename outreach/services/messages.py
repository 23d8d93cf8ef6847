"""
Message center — sent messages joined to their draft text and replies.
"""
from collections import defaultdict

from outreach.database import get_session
from outreach.models.draft import Draft
from outreach.models.message import Message
from outreach.models.page import Page
from outreach.models.reply import Reply


def list_messages():
    """Every message, most recently sent first."""
    session = get_session()
    try:
        rows = (
            session.query(Message, Page.name, Draft)
            .outerjoin(Page, Page.id == Message.page_id)
            .outerjoin(Draft, Draft.id == Message.draft_id)
            .order_by(Message.sent_at.desc(), Message.id.desc())
            .all()
        )
        message_ids = [m.id for m, _, _ in rows]

        replies_by_message = defaultdict(list)
        if message_ids:
            replies = (
                session.query(Reply)
                .filter(Reply.message_id.in_(message_ids))
                .order_by(Reply.received_at.desc(), Reply.id.desc())
                .all()
            )
            for reply in replies:
                replies_by_message[reply.message_id].append(reply.to_dict())

        results = []
        for message, page_name, draft in rows:
            data = message.to_dict()
            data['pages'] = {'name': page_name}
            data['drafts'] = {
                'fb_message': draft.fb_message,
                'email_subject': draft.email_subject,
                'email_body': draft.email_body,
            } if draft is not None else None
            data['replies'] = replies_by_message.get(message.id, [])
            results.append(data)
        return results
    finally:
        session.close()
