"""
Page scoring procedure.

score_page() is the single entry point. With ANALYZER_URL configured the
request goes to that HTTP endpoint (through the 'analyzer' circuit breaker);
otherwise the placeholder generator below produces demo output. The
placeholder is not a design analysis: scores and confidence are random.
"""
import logging
import random
from typing import Any, Dict, List

import requests

from outreach.config import ANALYZER_URL, NEEDS_HELP_BELOW, COULD_IMPROVE_BELOW
from outreach.errors import UpstreamError, ValidationError
from outreach.services.circuit_breaker import get_breaker

logger = logging.getLogger('services.analyzer')

PLACEHOLDER_ISSUES = [
    {'type': 'Branding', 'severity': 'Medium',
     'description': 'Logo is not prominent enough or is used inconsistently across recent posts.'},
    {'type': 'UX', 'severity': 'High',
     'description': 'The primary Call-to-Action is not immediately clear to a new visitor.'},
    {'type': 'Content Quality', 'severity': 'Low',
     'description': 'Text in some posts contains minor spelling or grammatical errors.'},
    {'type': 'Technical SEO', 'severity': 'Medium',
     'description': 'Facebook Page meta tags (og:description) are missing or too short.'},
]

PLACEHOLDER_SUGGESTIONS = [
    {'title': 'Brand Guideline Creation', 'priority': 'high',
     'description': 'We can establish a consistent brand guideline for your logo, colors, and typography.'},
    {'title': 'High-Resolution Post Graphics', 'priority': 'medium',
     'description': 'Our team will design professional, high-resolution graphics for your future posts.'},
    {'title': 'Website Landing Page', 'priority': 'low',
     'description': 'A dedicated landing page can convert your Facebook visitors into customers more effectively.'},
]


def decide_need(score: int) -> str:
    """yes below 65, maybe below 85, no otherwise."""
    if score < NEEDS_HELP_BELOW:
        return 'yes'
    if score < COULD_IMPROVE_BELOW:
        return 'maybe'
    return 'no'


def placeholder_analysis(rng=None) -> Dict[str, Any]:
    """Random demo scorecard in the shape of a real one."""
    rng = rng or random
    overall_score = rng.randrange(40, 90)
    need_decision = decide_need(overall_score)
    return {
        'overall_score': overall_score,
        'issues': [dict(i) for i in PLACEHOLDER_ISSUES[:rng.randint(2, 3)]],
        'suggestions': [dict(s) for s in PLACEHOLDER_SUGGESTIONS[:rng.randint(1, 2)]],
        'images_analyzed': 0,
        'need_decision': need_decision,
        'confidence_score': rng.random() * 0.3 + 0.7,
        'rationale': (
            f"The AI decided '{need_decision}' because the overall design score of "
            f"{overall_score} indicates several areas for branding and UX improvement."
        ),
    }


def _call_remote_analyzer(payload: Dict[str, Any]) -> Dict[str, Any]:
    def _post():
        resp = requests.post(ANALYZER_URL, json=payload, timeout=60)
        resp.raise_for_status()
        return resp.json()
    return get_breaker('analyzer').call(_post)


def _normalize(result: Dict[str, Any]) -> Dict[str, Any]:
    """Coerce a scorer response into the stored shape."""
    try:
        score = int(result['overall_score'])
    except (KeyError, TypeError, ValueError):
        raise UpstreamError('Scoring procedure returned no overall_score')

    try:
        issues: List[Dict] = list(result.get('issues') or [])
        suggestions: List[Dict] = list(result.get('suggestions') or [])
        images_analyzed = int(result.get('images_analyzed') or 0)
        confidence = result.get('confidence_score')
        confidence = float(confidence) if confidence is not None else None
    except (TypeError, ValueError):
        raise UpstreamError('Scoring procedure returned a malformed scorecard')

    return {
        'overall_score': score,
        'issues': issues,
        'suggestions': suggestions,
        'images_analyzed': images_analyzed,
        # Always derived from the score, whatever the scorer claims
        'need_decision': decide_need(score),
        'confidence_score': confidence,
        'rationale': result.get('rationale') or '',
    }


def score_page(page_id, user_id, page_url, page_name) -> Dict[str, Any]:
    """
    Score one page.

    Input mirrors the remote procedure contract
    {page_id, user_id, page_url, page_name}; output is
    {overall_score, issues, suggestions, need_decision, confidence_score,
    rationale, images_analyzed}.
    """
    if not page_id or not user_id or not page_name:
        raise ValidationError('page_id, user_id, and page_name are required')

    if not ANALYZER_URL:
        result = placeholder_analysis()
        logger.info("Placeholder score %d for page %s", result['overall_score'], page_id)
        return result

    payload = {
        'page_id': page_id,
        'user_id': user_id,
        'page_url': page_url,
        'page_name': page_name,
    }
    try:
        raw = _call_remote_analyzer(payload)
    except requests.RequestException as e:
        logger.error("Scoring request for page %s failed: %s", page_id, e)
        raise UpstreamError(f'Function Error: {e}')
    result = _normalize(raw)
    logger.info("Remote score %d for page %s", result['overall_score'], page_id)
    return result
