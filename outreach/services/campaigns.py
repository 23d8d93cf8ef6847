"""
Campaign grouping — create, status changes, delete, detail view.

Counters on the campaign row are not recomputed here.
"""
import logging

from sqlalchemy.exc import IntegrityError

from outreach.database import get_session
from outreach.errors import NotFoundError, ValidationError
from outreach.models.campaign import Campaign
from outreach.models.draft import Draft
from outreach.services.audit import record_action
from outreach.services.drafts import list_drafts
from outreach.workflow import CAMPAIGN_WORKFLOW

logger = logging.getLogger('services.campaigns')


def list_campaigns(status=None):
    session = get_session()
    try:
        query = session.query(Campaign).order_by(Campaign.created_at.desc(), Campaign.id.desc())
        if status:
            query = query.filter_by(status=status)
        return [c.to_dict() for c in query.all()]
    finally:
        session.close()


def create_campaign(name, description, user):
    name = name.strip() if isinstance(name, str) else ''
    if not name:
        raise ValidationError('Name is required')

    session = get_session()
    try:
        campaign = Campaign(
            name=name,
            description=(description.strip() if isinstance(description, str) else '') or None,
            status='active',
            created_by=user.id,
        )
        session.add(campaign)
        session.flush()
        record_action(session, user.id, 'Campaign Created', 'campaign', campaign.id, {'name': name})
        session.commit()
        logger.info("Campaign %s '%s' created by %s", campaign.id, name, user.id)
        return campaign.to_dict()
    except IntegrityError:
        session.rollback()
        raise ValidationError(f"A campaign named '{name}' already exists")
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def set_campaign_status(campaign_id, status, user):
    """Move a campaign to status if its workflow allows it."""
    session = get_session()
    try:
        campaign = session.get(Campaign, campaign_id)
        if campaign is None:
            raise NotFoundError('Campaign', campaign_id)
        action = CAMPAIGN_WORKFLOW.transition_to(campaign.status, status)
        previous = campaign.status
        campaign.status = status
        record_action(session, user.id, 'Campaign Status Changed', 'campaign', campaign_id, {
            'name': campaign.name, 'from': previous, 'to': status, 'action': action,
        })
        session.commit()
        return campaign.to_dict()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def delete_campaign(campaign_id, user):
    """
    Remove the campaign row.

    Drafts that pointed at it are detached (campaign_id cleared) rather than
    left dangling; the drafts themselves are kept.
    """
    session = get_session()
    try:
        campaign = session.get(Campaign, campaign_id)
        if campaign is None:
            raise NotFoundError('Campaign', campaign_id)
        name = campaign.name
        detached = (
            session.query(Draft)
            .filter_by(campaign_id=campaign_id)
            .update({Draft.campaign_id: None}, synchronize_session=False)
        )
        session.delete(campaign)
        record_action(session, user.id, 'Campaign Deleted', 'campaign', campaign_id, {
            'name': name, 'drafts_detached': detached,
        })
        session.commit()
        logger.info("Campaign %s deleted by %s (%d drafts detached)", campaign_id, user.id, detached)
        return {'ok': True, 'drafts_detached': detached}
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def campaign_detail(campaign_id):
    """Campaign, its drafts, and the other active campaigns drafts can move to."""
    session = get_session()
    try:
        campaign = session.get(Campaign, campaign_id)
        if campaign is None:
            raise NotFoundError('Campaign', campaign_id)
        data = campaign.to_dict()
        targets = (
            session.query(Campaign.id, Campaign.name)
            .filter(Campaign.status == 'active', Campaign.id != campaign_id)
            .order_by(Campaign.name)
            .all()
        )
        data['move_targets'] = [{'id': t.id, 'name': t.name} for t in targets]
    finally:
        session.close()

    data['drafts'] = list_drafts(status='all', campaign_id=campaign_id)
    return data
