"""
Draft queue, editing and the approval workflow.

Transitions are validated by DRAFT_WORKFLOW before anything is written.
Sending is bookkeeping only: it writes the Message row and the audit entry,
nothing is delivered.
"""
import logging
from datetime import datetime, timezone

from outreach.database import get_session
from outreach.errors import NotFoundError, ValidationError
from outreach.models.analysis import Analysis
from outreach.models.campaign import Campaign
from outreach.models.draft import Draft
from outreach.models.message import Message
from outreach.models.page import Page
from outreach.services.audit import record_action
from outreach.services.notifications import notify_message_sent
from outreach.workflow import DRAFT_WORKFLOW, DRAFT_AUDIT_ACTIONS

logger = logging.getLogger('services.drafts')

EDITABLE_FIELDS = ('fb_message', 'email_subject', 'email_body')
SEND_PLATFORM = 'email'


def _with_relations(draft, page, analysis):
    data = draft.to_dict()
    data['pages'] = {
        'name': page.name,
        'url': page.url,
        'contact_email': page.contact_email,
    } if page is not None else None
    data['analyses'] = {
        'overall_score': analysis.overall_score,
        'need_decision': analysis.need_decision,
    } if analysis is not None else None
    data['allowed_actions'] = DRAFT_WORKFLOW.allowed_actions(draft.status)
    return data


def _joined_query(session):
    return (
        session.query(Draft, Page, Analysis)
        .outerjoin(Page, Page.id == Draft.page_id)
        .outerjoin(Analysis, Analysis.id == Draft.analysis_id)
    )


def list_drafts(status='pending', campaign_id=None):
    """Drafts newest first; status 'all' disables the status filter."""
    session = get_session()
    try:
        query = _joined_query(session)
        if status and status != 'all':
            query = query.filter(Draft.status == status)
        if campaign_id is not None:
            query = query.filter(Draft.campaign_id == campaign_id)
        rows = query.order_by(Draft.created_at.desc(), Draft.id.desc()).all()
        return [_with_relations(d, p, a) for d, p, a in rows]
    finally:
        session.close()


def get_draft(draft_id):
    session = get_session()
    try:
        row = _joined_query(session).filter(Draft.id == draft_id).first()
        if row is None:
            raise NotFoundError('Draft', draft_id)
        return _with_relations(*row)
    finally:
        session.close()


def save_draft(draft_id, fields, user):
    """
    Persist edited text and bump the version by one.

    Status is left alone. Concurrent saves are last-write-wins; the version
    increment itself happens in SQL so two saves never collapse into one.
    """
    updates = {k: fields[k] for k in EDITABLE_FIELDS if k in fields}
    if not updates:
        raise ValidationError('Nothing to save')

    session = get_session()
    try:
        draft = session.get(Draft, draft_id)
        if draft is None:
            raise NotFoundError('Draft', draft_id)
        for key, value in updates.items():
            setattr(draft, key, value if value is not None else '')
        draft.version = Draft.version + 1
        record_action(session, user.id, 'Draft Edited', 'draft', draft_id, {
            'fields': sorted(updates),
        })
        session.commit()
        result = draft.to_dict()
        logger.info("Draft %s saved by %s (version %d)", draft_id, user.id, result['version'])
        return result
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def apply_action(draft_id, action, user):
    """
    approve / reject / send a draft.

    Returns {'draft': ..., 'message': ... or None}.
    """
    session = get_session()
    try:
        draft = session.get(Draft, draft_id)
        if draft is None:
            raise NotFoundError('Draft', draft_id)

        new_status = DRAFT_WORKFLOW.next_status(draft.status, action)
        draft.status = new_status
        draft.reviewed_by = user.id
        draft.reviewed_at = datetime.now(timezone.utc)

        message = None
        page = session.get(Page, draft.page_id)
        page_name = page.name if page is not None else None
        if action == 'send':
            message = Message(
                draft_id=draft.id,
                page_id=draft.page_id,
                platform=SEND_PLATFORM,
                status='sent',
                sent_by=user.id,
            )
            session.add(message)
            session.flush()
            record_action(session, user.id, DRAFT_AUDIT_ACTIONS[action], 'message', message.id, {
                'draft_id': draft.id,
                'page_name': page_name,
                'platform': SEND_PLATFORM,
            })
        else:
            record_action(session, user.id, DRAFT_AUDIT_ACTIONS[action], 'draft', draft.id, {
                'action': action,
            })

        session.commit()
        result = {
            'draft': draft.to_dict(),
            'message': message.to_dict() if message is not None else None,
        }
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

    logger.info("Draft %s %s by %s → %s", draft_id, action, user.id, new_status)
    if action == 'send':
        notify_message_sent(page_name or 'a page', SEND_PLATFORM, user.name)
    return result


def assign_campaign(draft_id, campaign_id, user):
    """Set or clear a draft's campaign. The campaign only has to exist."""
    session = get_session()
    try:
        draft = session.get(Draft, draft_id)
        if draft is None:
            raise NotFoundError('Draft', draft_id)
        if campaign_id is not None and session.get(Campaign, campaign_id) is None:
            raise NotFoundError('Campaign', campaign_id)

        previous = draft.campaign_id
        draft.campaign_id = campaign_id
        record_action(session, user.id, 'Draft Assigned' if campaign_id else 'Draft Unassigned',
                      'draft', draft_id, {'from_campaign': previous, 'to_campaign': campaign_id})
        session.commit()
        return draft.to_dict()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
