"""
Centralized configuration — env vars, enumerations, default settings.
"""
import os


# ── Logging ──────────────────────────────────────────────────────────────────
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_FORMAT = os.getenv('LOG_FORMAT', 'text')

# ── Flask ────────────────────────────────────────────────────────────────────
SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-change-me')

# ── Redis (circuit breaker state) ────────────────────────────────────────────
REDIS_URL = os.getenv('REDIS_URL', 'redis://localhost:6379/0')

# ── PostgreSQL ────────────────────────────────────────────────────────────────
DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///local.db')

# ── OpenAI (mini chat) ───────────────────────────────────────────────────────
OPENAI_API_KEY = os.getenv('OPENAI_API_KEY')
OPENAI_MODEL = os.getenv('OPENAI_MODEL', 'gpt-4o-mini')

# ── Ollama (local LLM) ──────────────────────────────────────────────────────
OLLAMA_URL = os.getenv('OLLAMA_URL', 'http://localhost:11434')
OLLAMA_MODEL = os.getenv('OLLAMA_MODEL', 'gemma3:1b')

# ── Page scoring ─────────────────────────────────────────────────────────────
# When set, scoring is delegated to this HTTP endpoint instead of the
# placeholder generator.
ANALYZER_URL = os.getenv('ANALYZER_URL')
FETCH_PAGE_METADATA = os.getenv('FETCH_PAGE_METADATA', '').lower() in ('1', 'true', 'yes')

# ── Cloudflare R2 ─────────────────────────────────────────────────────────────
R2_ACCESS_KEY_ID = os.getenv('R2_ACCESS_KEY_ID')
R2_SECRET_ACCESS_KEY = os.getenv('R2_SECRET_ACCESS_KEY')
R2_BUCKET_NAME = os.getenv('R2_BUCKET_NAME')
R2_ENDPOINT_URL = os.getenv('R2_ENDPOINT_URL')
R2_PUBLIC_URL = os.getenv('R2_PUBLIC_URL')

# ── Slack notifications ──────────────────────────────────────────────────────
SLACK_WEBHOOK_URL = os.getenv('SLACK_WEBHOOK_URL')

# ── Proposal templates ───────────────────────────────────────────────────────
AGENCY_SIGNATURE = os.getenv('AGENCY_SIGNATURE', 'The Minimind Agency Team')

# ── Page intake defaults ─────────────────────────────────────────────────────
DEFAULT_PAGE_CATEGORY = 'Local Business'
DEFAULT_COVER_IMAGE_URL = 'https://images.pexels.com/photos/3184291/pexels-photo-3184291.jpeg'
DEFAULT_PROFILE_IMAGE_URL = 'https://images.pexels.com/photos/3184292/pexels-photo-3184292.jpeg'

# ── Decision thresholds (score → need_decision) ──────────────────────────────
NEEDS_HELP_BELOW = 65
COULD_IMPROVE_BELOW = 85

# ── Roles & statuses ─────────────────────────────────────────────────────────
ROLES = ['admin', 'moderator', 'analyst', 'sales']

USER_STATUSES = ['pending_approval', 'active', 'banned']

DRAFT_STATUSES = ['pending', 'approved', 'rejected', 'sent', 'scheduled']

CAMPAIGN_STATUSES = ['active', 'paused', 'completed', 'archived']

MESSAGE_PLATFORMS = ['facebook', 'email']

REPLY_CLASSIFICATIONS = ['positive', 'neutral', 'negative', 'spam', 'needs_info']

# ── Settings rows seeded on a fresh install ──────────────────────────────────
DEFAULT_SETTINGS = [
    ('moderator_approval_required', 'true', 'Drafts must be approved by a moderator before sending'),
    ('auto_approve_enabled', 'false', 'Automatically approve drafts for high-confidence analyses'),
    ('daily_send_limit', '50', 'Maximum outreach messages sent per day'),
    ('min_confidence_score', '0.7', 'Minimum analysis confidence to allow proposal generation'),
    ('follow_up_delay_days', '[5, 12, 25]', 'Days after the first message to send follow-ups'),
]
