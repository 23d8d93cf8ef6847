"""
Mini chat passthrough — OpenAI when a key is configured, local Ollama otherwise.
"""
import logging

import openai
import requests

from outreach.config import OPENAI_MODEL, OLLAMA_URL, OLLAMA_MODEL
from outreach.errors import UpstreamError, ValidationError
from outreach.services.circuit_breaker import get_breaker

logger = logging.getLogger('services.chat')

SYSTEM_PROMPT = (
    "You are a helpful assistant for a design agency's outreach team. "
    "Answer briefly and concretely."
)


def _call_openai(prompt):
    from outreach.extensions import openai_client
    response = get_breaker('openai').call(
        openai_client.chat.completions.create,
        model=OPENAI_MODEL,
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ],
    )
    return response.choices[0].message.content


def _call_ollama(prompt):
    def _post():
        resp = requests.post(
            f"{OLLAMA_URL}/api/chat",
            json={
                "model": OLLAMA_MODEL,
                "messages": [
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                "stream": False,
            },
            timeout=30,
        )
        resp.raise_for_status()
        return resp.json()["message"]["content"]
    return get_breaker('ollama').call(_post)


def chat(prompt):
    """Return {'reply': text} for one prompt."""
    from outreach.extensions import openai_client

    prompt = prompt.strip() if isinstance(prompt, str) else ''
    if not prompt:
        raise ValidationError('Prompt is required')

    try:
        reply = _call_openai(prompt) if openai_client else _call_ollama(prompt)
    except (requests.RequestException, openai.OpenAIError, KeyError) as e:
        logger.error("Chat request failed: %s", e)
        raise UpstreamError('Failed to get a reply from the assistant')
    return {'reply': (reply or '').strip()}
