"""
Proposal generation — turn a qualifying analysis into a pending draft.

Text is template interpolation over the page name and the analysis' first
issue; no model is called.
"""
import logging

from outreach.config import AGENCY_SIGNATURE
from outreach.database import get_session
from outreach.errors import NotFoundError, ValidationError
from outreach.models.analysis import Analysis
from outreach.models.draft import Draft
from outreach.models.page import Page

logger = logging.getLogger('services.proposals')

READY_DECISIONS = ('yes', 'maybe')


def build_proposal(page_name, issues):
    """Return (fb_message, email_subject, email_body)."""
    first_issue = 'design inconsistencies'
    if issues and isinstance(issues[0], dict) and issues[0].get('description'):
        first_issue = issues[0]['description'].rstrip('.')
    message = (
        f"Hi {page_name}, I checked your Facebook page and noticed some issues regarding "
        f"{first_issue}. I can share one free concept for you to review, no obligations. Interested?"
    )
    subject = f"A design idea for {page_name}"
    body = f"{message}<br><br>Best,<br>{AGENCY_SIGNATURE}"
    return message, subject, body


def list_ready_analyses():
    """Analyses that recommend outreach and have no draft yet, newest first."""
    session = get_session()
    try:
        drafted = session.query(Draft.analysis_id)
        rows = (
            session.query(Analysis, Page)
            .join(Page, Page.id == Analysis.page_id)
            .filter(Analysis.need_decision.in_(READY_DECISIONS))
            .filter(Analysis.id.notin_(drafted))
            .order_by(Analysis.analysis_date.desc(), Analysis.id.desc())
            .all()
        )
        results = []
        for analysis, page in rows:
            data = analysis.to_dict()
            data['pages'] = {'name': page.name, 'url': page.url}
            results.append(data)
        return results
    finally:
        session.close()


def create_proposal(analysis_id, user_id):
    """Generate and store a version-1 pending draft for the analysis."""
    if not analysis_id or not user_id:
        raise ValidationError('analysis_id and user_id are required.')

    session = get_session()
    try:
        analysis = session.get(Analysis, analysis_id)
        if analysis is None:
            raise NotFoundError('Analysis', analysis_id)
        page = session.get(Page, analysis.page_id)
        if page is None:
            raise NotFoundError('Page data for analysis', analysis_id)
        if session.query(Draft.id).filter_by(analysis_id=analysis.id).first() is not None:
            raise ValidationError('A draft already exists for this analysis')

        fb_message, subject, body = build_proposal(page.name, analysis.issues)
        draft = Draft(
            page_id=page.id,
            analysis_id=analysis.id,
            fb_message=fb_message,
            email_subject=subject,
            email_body=body,
            status='pending',
            created_by=user_id,
            version=1,
        )
        session.add(draft)
        session.commit()
        logger.info("Draft %s created from analysis %s", draft.id, analysis.id)
        return draft.to_dict()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
