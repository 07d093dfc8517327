"""Marketplace affiliate link rewriting.

Comparison tables link to several shops, often through a tracking redirect
(e.g. ``https://atid.me/...?url=<target>``). Only marketplace targets are
kept, and each one gets our partner id injected.
"""

from __future__ import annotations

import logging
from urllib.parse import parse_qs, parse_qsl, urlencode, urlsplit, urlunsplit

from mybest.config import AFFILIATE_ID, MARKETPLACE_TOKEN, REDIRECT_HOSTS

logger = logging.getLogger(__name__)

AFFILIATE_PARAM = "affiliate_id"


def rewrite_affiliate_link(
    link: str,
    affiliate_id: str = AFFILIATE_ID,
    redirect_hosts: tuple[str, ...] = REDIRECT_HOSTS,
    marketplace_token: str = MARKETPLACE_TOKEN,
) -> str:
    """Resolve a shop link to a marketplace URL carrying our affiliate id.

    Args:
        link: href as found in the page.
        affiliate_id: partner id written to the ``affiliate_id`` parameter.
        redirect_hosts: hosts whose real target is in the ``url`` parameter.
        marketplace_token: substring the target must contain (case-insensitive).

    Returns:
        Rewritten URL, or "" when the link is unparseable or not a
        marketplace link.
    """
    try:
        parsed = urlsplit(link)
    except ValueError as e:
        logger.debug("Unparseable link skipped: link=%r, error=%s", link, e)
        return ""

    if any(host in parsed.netloc for host in redirect_hosts):
        target = parse_qs(parsed.query).get("url", [""])[0]
    else:
        target = link

    if marketplace_token.lower() not in target.lower():
        return ""

    try:
        target_parts = urlsplit(target)
    except ValueError as e:
        logger.debug("Unparseable redirect target skipped: target=%r, error=%s", target, e)
        return ""

    params = [
        (key, value)
        for key, value in parse_qsl(target_parts.query, keep_blank_values=True)
        if key != AFFILIATE_PARAM
    ]
    params.append((AFFILIATE_PARAM, affiliate_id))
    # Stable sort keeps repeated keys in their original order
    params.sort(key=lambda kv: kv[0])
    return urlunsplit(target_parts._replace(query=urlencode(params)))
