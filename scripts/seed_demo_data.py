#!/usr/bin/env python3
"""
Seed demo data for clicking through the app locally.

Creates:
  1. An active admin and an active moderator (password: demo-pass)
  2. Two demo Facebook pages, each with an analysis and a pending draft
  3. One demo campaign holding the first draft
  4. The default settings rows

Usage:
    python scripts/seed_demo_data.py          # seed everything
    python scripts/seed_demo_data.py --clear  # wipe seeded data first

Requires: DATABASE_URL set (or defaults to sqlite:///local.db).
"""
import sys
import os
import argparse

from werkzeug.security import generate_password_hash

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from outreach import create_app
from outreach.database import get_session, engine, Base
from outreach.models.analysis import Analysis
from outreach.models.audit_log import AuditLog
from outreach.models.campaign import Campaign
from outreach.models.draft import Draft
from outreach.models.message import Message
from outreach.models.page import Page
from outreach.models.reply import Reply
from outreach.models.user import AuthIdentity, User
from outreach.services.analyzer import decide_need
from outreach.services.proposals import build_proposal
from outreach.services.settings import ensure_default_settings


# Seeded rows are recognised by these markers so --clear only touches them
SEED_EMAIL_DOMAIN = '@seed.local'
SEED_URL_PREFIX = 'https://facebook.com/seed-'
SEED_CAMPAIGN = 'Seed: Spring outreach'
DEMO_PASSWORD = 'demo-pass'

USERS = [
    {'email': 'admin' + SEED_EMAIL_DOMAIN, 'name': 'Demo Admin', 'role': 'admin'},
    {'email': 'moderator' + SEED_EMAIL_DOMAIN, 'name': 'Demo Moderator', 'role': 'moderator'},
]

PAGES = [
    {'slug': 'corner-bakery', 'name': 'Corner Bakery', 'score': 58,
     'issues': [{'type': 'Branding', 'severity': 'Medium',
                 'description': 'Logo is not prominent enough or is used inconsistently across recent posts.'}]},
    {'slug': 'green-thumb-garden', 'name': 'Green Thumb Garden', 'score': 74,
     'issues': [{'type': 'UX', 'severity': 'High',
                 'description': 'The primary Call-to-Action is not immediately clear to a new visitor.'}]},
]


def seed_users(session):
    ids = {}
    for u in USERS:
        identity = session.query(AuthIdentity).filter_by(email=u['email']).first()
        if identity is None:
            identity = AuthIdentity(
                email=u['email'],
                password_hash=generate_password_hash(DEMO_PASSWORD),
                user_metadata={'name': u['name']},
            )
            session.add(identity)
            session.flush()
        profile = session.get(User, identity.id)
        profile.role = u['role']
        profile.status = 'active'
        ids[u['role']] = identity.id
        print(f"  {u['role']:<10} {u['email']}")
    return ids


def seed_pages(session, admin_id):
    drafts = []
    for p in PAGES:
        url = SEED_URL_PREFIX + p['slug']
        page = session.query(Page).filter_by(url=url).first()
        if page is None:
            page = Page(url=url, name=p['name'], category='Local Business', created_by=admin_id)
            session.add(page)
            session.flush()

        analysis = Analysis(
            page_id=page.id,
            overall_score=p['score'],
            issues=p['issues'],
            suggestions=[],
            images_analyzed=0,
            need_decision=decide_need(p['score']),
            confidence_score=0.8,
            rationale=f"Seeded analysis with score {p['score']}.",
            analyzed_by=admin_id,
        )
        session.add(analysis)
        session.flush()

        fb_message, subject, body = build_proposal(page.name, analysis.issues)
        draft = Draft(
            page_id=page.id, analysis_id=analysis.id,
            fb_message=fb_message, email_subject=subject, email_body=body,
            status='pending', created_by=admin_id, version=1,
        )
        session.add(draft)
        session.flush()
        drafts.append(draft)
        print(f"  page       {page.name} (score {p['score']}, draft {draft.id})")
    return drafts


def seed_campaign(session, admin_id, drafts):
    campaign = session.query(Campaign).filter_by(name=SEED_CAMPAIGN).first()
    if campaign is None:
        campaign = Campaign(name=SEED_CAMPAIGN, description='Demo campaign', status='active', created_by=admin_id)
        session.add(campaign)
        session.flush()
    if drafts:
        drafts[0].campaign_id = campaign.id
    print(f"  campaign   {campaign.name}")


# ── Clear / Main ─────────────────────────────────────────────────────────────

def clear_seeded_data(session):
    """Remove seeded users, pages (with everything hanging off them) and the campaign."""
    page_ids = [p.id for p in session.query(Page.id).filter(Page.url.like(f'{SEED_URL_PREFIX}%'))]
    draft_ids = [d.id for d in session.query(Draft.id).filter(Draft.page_id.in_(page_ids))]
    message_ids = [m.id for m in session.query(Message.id).filter(Message.draft_id.in_(draft_ids))]

    session.query(Reply).filter(Reply.message_id.in_(message_ids)).delete(synchronize_session=False)
    session.query(Message).filter(Message.id.in_(message_ids)).delete(synchronize_session=False)
    deleted_drafts = session.query(Draft).filter(Draft.id.in_(draft_ids)).delete(synchronize_session=False)
    session.query(Analysis).filter(Analysis.page_id.in_(page_ids)).delete(synchronize_session=False)
    deleted_pages = session.query(Page).filter(Page.id.in_(page_ids)).delete(synchronize_session=False)
    session.query(Campaign).filter_by(name=SEED_CAMPAIGN).delete(synchronize_session=False)

    user_ids = [u.id for u in session.query(AuthIdentity.id).filter(AuthIdentity.email.like(f'%{SEED_EMAIL_DOMAIN}'))]
    session.query(AuditLog).filter(AuditLog.user_id.in_(user_ids)).delete(synchronize_session=False)
    session.query(User).filter(User.id.in_(user_ids)).delete(synchronize_session=False)
    deleted_users = session.query(AuthIdentity).filter(AuthIdentity.id.in_(user_ids)).delete(synchronize_session=False)
    session.commit()

    print(f'Cleared {deleted_users} users, {deleted_pages} pages, {deleted_drafts} drafts.')


def main():
    parser = argparse.ArgumentParser(description='Seed demo data for local use')
    parser.add_argument('--clear', action='store_true', help='Clear seeded data before seeding')
    args = parser.parse_args()

    app = create_app()
    with app.app_context():
        # Ensure tables exist (for SQLite local dev)
        Base.metadata.create_all(engine)

        session = get_session()
        try:
            if args.clear:
                clear_seeded_data(session)

            print('Seeding demo data...')
            ids = seed_users(session)
            drafts = seed_pages(session, ids['admin'])
            seed_campaign(session, ids['admin'], drafts)
            ensure_default_settings(session)
            session.commit()
            print(f'\nDone! Log in at http://localhost:8080/login with password "{DEMO_PASSWORD}".')

        except Exception as e:
            session.rollback()
            print(f'Error: {e}')
            raise
        finally:
            session.close()


if __name__ == '__main__':
    main()
