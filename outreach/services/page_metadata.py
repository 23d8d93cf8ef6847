"""
Page display metadata — name derivation from the URL, optional og: scrape.
"""
import logging
import re
from typing import Dict
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

from outreach.services.circuit_breaker import get_breaker

logger = logging.getLogger('services.page_metadata')

USER_AGENT = 'Mozilla/5.0 (compatible; OutreachDesk/1.0)'


def derive_page_name(url: str) -> str:
    """
    Display name from the URL's last path segment.

    "https://facebook.com/best-local-cafe?ref=x" → "Best Local Cafe"
    """
    segment = urlparse(url or '').path.rstrip('/').split('/')[-1]
    if not segment:
        return 'Unknown Page'
    name = segment.replace('-', ' ')
    return re.sub(r'\b\w', lambda m: m.group(0).upper(), name)


def fetch_page_metadata(url: str) -> Dict:
    """
    Scrape og:title / og:description / og:image from the page.

    Returns {title, description, imageUrl}; any key may be None. Scrape
    failure is logged and yields empty metadata.
    """
    result: Dict = {'title': None, 'description': None, 'imageUrl': None}
    try:
        resp = get_breaker('page_fetch').call(
            requests.get, url, timeout=10, allow_redirects=True,
            headers={'User-Agent': USER_AGENT},
        )
        if not resp.ok:
            logger.info("Metadata fetch for %s returned HTTP %s", url, resp.status_code)
            return result
        soup = BeautifulSoup(resp.text, 'html.parser')

        def _meta(prop):
            tag = soup.find('meta', attrs={'property': prop}) or soup.find('meta', attrs={'name': prop})
            content = tag.get('content') if tag else None
            return content.strip() if content else None

        result['title'] = _meta('og:title') or (soup.title.string.strip() if soup.title and soup.title.string else None)
        result['description'] = _meta('og:description') or _meta('description')
        result['imageUrl'] = _meta('og:image')
    except Exception as e:
        logger.error("Metadata fetch error %s: %s", url, e)
    return result
