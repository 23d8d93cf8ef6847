"""
Process-wide clients: Redis (breaker state), R2 (page images), OpenAI (mini chat).

Each optional client is None when its credentials are missing; callers check
for that and fall back (original image URL, local Ollama) instead of failing.
"""
import logging
import redis
import boto3
from botocore.client import Config

from outreach.config import (
    REDIS_URL,
    R2_ACCESS_KEY_ID, R2_SECRET_ACCESS_KEY,
    R2_ENDPOINT_URL,
    OPENAI_API_KEY,
)

logger = logging.getLogger('outreach.extensions')


def _make_r2_client():
    if not (R2_ACCESS_KEY_ID and R2_SECRET_ACCESS_KEY and R2_ENDPOINT_URL):
        logger.warning("R2 credentials not set — page images stay on their original hosts")
        return None
    try:
        client = boto3.client(
            's3',
            endpoint_url=R2_ENDPOINT_URL,
            aws_access_key_id=R2_ACCESS_KEY_ID,
            aws_secret_access_key=R2_SECRET_ACCESS_KEY,
            config=Config(signature_version='s3v4'),
            region_name='auto',
        )
    except Exception as e:
        logger.error("Could not create R2 client: %s", e)
        return None
    logger.info("R2 client ready for page image re-hosting")
    return client


def _make_openai_client():
    if not OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY not set — mini chat uses the local Ollama model")
        return None
    try:
        from openai import OpenAI
        client = OpenAI(api_key=OPENAI_API_KEY)
    except Exception as e:
        logger.error("Could not create OpenAI client: %s", e)
        return None
    logger.info("OpenAI client ready for mini chat")
    return client


# Connection is lazy; nothing talks to Redis until a breaker reads its state
redis_client = redis.from_url(REDIS_URL, decode_responses=True)
r2_client = _make_r2_client()
openai_client = _make_openai_client()
