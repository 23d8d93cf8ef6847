"""
Dashboard figures — headline counts plus the recent activity feed.
"""
from datetime import datetime, timezone

from outreach.database import get_session
from outreach.models.analysis import Analysis
from outreach.models.message import Message
from outreach.models.reply import Reply
from outreach.services.audit import recent_activity


def time_since(iso_str, now=None):
    """Convert an ISO timestamp to a '2m ago' style string."""
    if not iso_str:
        return ''
    try:
        if isinstance(iso_str, str):
            dt = datetime.fromisoformat(iso_str.replace('Z', '+00:00'))
        else:
            dt = iso_str
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        now = now or datetime.now(timezone.utc)
        diff = (now - dt).total_seconds()
        if diff < 60:
            return 'just now'
        if diff < 3600:
            return f'{int(diff // 60)}m ago'
        if diff < 86400:
            return f'{int(diff // 3600)}h ago'
        return f'{int(diff // 86400)}d ago'
    except (TypeError, ValueError):
        return ''


def dashboard_summary(activity_limit=7):
    session = get_session()
    try:
        stats = {
            'analyzed_pages': session.query(Analysis).count(),
            'proposals_sent': session.query(Message).filter_by(status='sent').count(),
            'replies': session.query(Reply).count(),
            # No conversion tracking exists yet
            'conversions': 0,
        }
    finally:
        session.close()

    activities = recent_activity(limit=activity_limit)
    for item in activities:
        item['time_since'] = time_since(item['timestamp'])
    return {'stats': stats, 'activities': activities}
