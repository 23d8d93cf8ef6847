"""
Page intake & scoring — upsert a page by URL, score it, store the analysis.

analyze_page() commits in two steps: the page row first, then the analysis
with its audit entry. A scoring failure therefore leaves the page behind;
the user simply retries.
"""
import logging
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError

from outreach.config import (
    DEFAULT_PAGE_CATEGORY, DEFAULT_COVER_IMAGE_URL, DEFAULT_PROFILE_IMAGE_URL,
    FETCH_PAGE_METADATA,
)
from outreach.database import get_session
from outreach.errors import NotFoundError, PermissionDenied, ValidationError
from outreach.models.analysis import Analysis
from outreach.models.draft import Draft
from outreach.models.message import Message
from outreach.models.page import Page
from outreach.models.reply import Reply
from outreach.services.analyzer import score_page, decide_need
from outreach.services.audit import record_action
from outreach.services.page_metadata import derive_page_name, fetch_page_metadata
from outreach.services.r2 import rehost_image_on_r2

logger = logging.getLogger('services.pages')


def upsert_page(session, url, user_id, name, metadata=None):
    """
    Insert-or-fetch the page keyed by URL.

    An existing row is returned (with fresher metadata applied) instead of
    raising on the unique constraint; a concurrent insert of the same URL is
    resolved by re-reading the winner's row.
    """
    metadata = metadata or {}
    page = session.query(Page).filter_by(url=url).first()
    if page is None:
        page = Page(
            url=url,
            name=name,
            category=DEFAULT_PAGE_CATEGORY,
            about=metadata.get('description'),
            cover_image_url=metadata.get('imageUrl') or DEFAULT_COVER_IMAGE_URL,
            profile_image_url=DEFAULT_PROFILE_IMAGE_URL,
            created_by=user_id,
        )
        session.add(page)
        try:
            session.flush()
        except IntegrityError:
            session.rollback()
            page = session.query(Page).filter_by(url=url).one()
    else:
        page.name = name or page.name
        if metadata.get('description'):
            page.about = metadata['description']
        if metadata.get('imageUrl'):
            page.cover_image_url = metadata['imageUrl']
    return page


def analyze_page(url, user, page_name=None):
    """
    Full intake flow for one URL.

    Returns {'page': ..., 'analysis': ..., 'metadata': {...}}.
    """
    url = url.strip() if isinstance(url, str) else ''
    if not url:
        raise ValidationError('Please enter a Facebook Page URL')
    if user is None:
        raise ValidationError('User not found. Please log in again.')

    metadata = fetch_page_metadata(url) if FETCH_PAGE_METADATA else {
        'title': None, 'description': None, 'imageUrl': None,
    }
    name = (page_name.strip() if isinstance(page_name, str) else '') or metadata.get('title') or derive_page_name(url)

    session = get_session()
    try:
        # Step 1: page row
        page = upsert_page(session, url, user.id, name, metadata)
        session.commit()
        page_id = page.id
        page_name = page.name

        # Step 1b: move images onto our own bucket (no-op without R2)
        cover = rehost_image_on_r2(page.cover_image_url, str(page_id), 'cover')
        profile = rehost_image_on_r2(page.profile_image_url, str(page_id), 'profile')
        if cover != page.cover_image_url or profile != page.profile_image_url:
            page.cover_image_url = cover
            page.profile_image_url = profile
            session.commit()

        # Step 2: scoring procedure
        result = score_page(page_id, user.id, url, page_name)

        # Step 3: analysis + page timestamp + audit
        analysis = Analysis(
            page_id=page_id,
            overall_score=result['overall_score'],
            issues=result['issues'],
            suggestions=result['suggestions'],
            images_analyzed=result.get('images_analyzed', 0),
            need_decision=decide_need(result['overall_score']),
            confidence_score=result.get('confidence_score'),
            rationale=result.get('rationale', ''),
            analyzed_by=user.id,
        )
        session.add(analysis)
        page.last_analyzed_at = datetime.now(timezone.utc)
        session.flush()
        record_action(session, user.id, 'Page Analyzed', 'page', page_id, {
            'page_name': page_name,
            'score': result['overall_score'],
        })
        session.commit()

        logger.info("Page %s analyzed by %s: score=%d decision=%s",
                    page_id, user.id, analysis.overall_score, analysis.need_decision)
        return {
            'page': page.to_dict(),
            'analysis': analysis.to_dict(),
            'metadata': metadata,
        }
    except Exception:
        session.rollback()
        logger.error("Analysis failed for %s", url, exc_info=True)
        raise
    finally:
        session.close()


def _analysis_with_page(analysis, page):
    data = analysis.to_dict()
    data['pages'] = page.to_dict() if page is not None else None
    return data


def list_history(user_id):
    """Analyses run by this user, newest first."""
    session = get_session()
    try:
        rows = (
            session.query(Analysis, Page)
            .outerjoin(Page, Page.id == Analysis.page_id)
            .filter(Analysis.analyzed_by == user_id)
            .order_by(Analysis.analysis_date.desc(), Analysis.id.desc())
            .all()
        )
        return [_analysis_with_page(a, p) for a, p in rows]
    finally:
        session.close()


def get_analysis(analysis_id):
    session = get_session()
    try:
        analysis = session.get(Analysis, analysis_id)
        if analysis is None:
            raise NotFoundError('Analysis', analysis_id)
        return _analysis_with_page(analysis, session.get(Page, analysis.page_id))
    finally:
        session.close()


def delete_analysis(analysis_id, user):
    """Delete an analysis together with its drafts and their message trail."""
    session = get_session()
    try:
        analysis = session.get(Analysis, analysis_id)
        if analysis is None:
            raise NotFoundError('Analysis', analysis_id)
        if analysis.analyzed_by != user.id and user.role != 'admin':
            raise PermissionDenied('Only the analyst who ran it or an admin can delete this analysis')

        draft_ids = [d.id for d in session.query(Draft.id).filter_by(analysis_id=analysis_id)]
        if draft_ids:
            message_ids = [m.id for m in session.query(Message.id).filter(Message.draft_id.in_(draft_ids))]
            if message_ids:
                session.query(Reply).filter(Reply.message_id.in_(message_ids)).delete(synchronize_session=False)
                session.query(Message).filter(Message.id.in_(message_ids)).delete(synchronize_session=False)
            session.query(Draft).filter(Draft.id.in_(draft_ids)).delete(synchronize_session=False)

        session.delete(analysis)
        record_action(session, user.id, 'Analysis Deleted', 'analysis', analysis_id, {
            'drafts_deleted': len(draft_ids),
        })
        session.commit()
        logger.info("Analysis %s deleted with %d drafts", analysis_id, len(draft_ids))
        return {'ok': True, 'drafts_deleted': len(draft_ids)}
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
