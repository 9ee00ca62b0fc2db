"""
Shared httpx client construction for upstream API calls
"""
from typing import Optional

import httpx
from loguru import logger


def get_httpx_client_kwargs(
    timeout: Optional[float] = None,
    proxy_url: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> dict:
    """
    Get httpx client kwargs including proxy if configured

    Args:
        timeout: Request timeout in seconds (None keeps the httpx default)
        proxy_url: Outbound proxy URL
        transport: Custom transport (e.g. httpx.MockTransport in tests)
    """
    kwargs = {}
    if timeout is not None:
        kwargs["timeout"] = timeout
    if transport is not None:
        kwargs["transport"] = transport
    elif proxy_url:
        kwargs["proxy"] = proxy_url
        logger.debug(f"Using proxy: {proxy_url}")
    return kwargs


def sarvam_headers(api_key: str) -> dict:
    """Request headers for Sarvam AI endpoints"""
    return {
        "Content-Type": "application/json",
        "api-subscription-key": api_key,
    }
