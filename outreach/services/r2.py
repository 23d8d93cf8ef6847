"""
Cloudflare R2 image re-hosting for page cover/profile pictures.
"""
import hashlib
import logging
import requests
from datetime import datetime

from outreach.config import R2_BUCKET_NAME, R2_PUBLIC_URL
from outreach.extensions import r2_client

logger = logging.getLogger('services.r2')


def rehost_image_on_r2(image_url: str, page_key: str, kind: str) -> str:
    """
    Copy a remote page image into our bucket and return its public URL.

    Falls back to the original URL whenever R2 is not configured or any step
    fails, so intake never stalls on image hosting.
    """
    if not r2_client or not image_url:
        return image_url

    if R2_PUBLIC_URL and image_url.startswith(R2_PUBLIC_URL):
        return image_url

    try:
        response = requests.get(image_url, timeout=15)
        response.raise_for_status()

        url_hash = hashlib.md5(image_url.encode()).hexdigest()
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        object_key = f"pages/{page_key}/{kind}_{timestamp}_{url_hash}.jpg"
        content_type = response.headers.get('Content-Type', 'image/jpeg')

        r2_client.put_object(
            Bucket=R2_BUCKET_NAME, Key=object_key,
            Body=response.content, ContentType=content_type,
        )

        rehosted_url = f"{R2_PUBLIC_URL}/{object_key}"
        logger.info("Re-hosted %s image to R2: %s", kind, object_key)
        return rehosted_url

    except Exception as e:
        logger.error("Error re-hosting %s image %s: %s", kind, image_url, e)
        return image_url
