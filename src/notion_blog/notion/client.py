# ABOUTME: Wrapper around the official Notion Python SDK.
# ABOUTME: Provides a throttled client for retrieving pages and their blocks.

import functools
import logging
import time

from notion_client import Client
from notion_client.errors import APIResponseError
from notion_client.helpers import collect_paginated_api

from ..ratelimit import RateLimiter

logger = logging.getLogger(__name__)


def retry_on_rate_limit(max_retries: int = 3):
    """Decorator to retry on 429 responses using Retry-After header.

    Args:
        max_retries: Maximum number of retry attempts.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            for attempt in range(max_retries):
                try:
                    return func(*args, **kwargs)
                except APIResponseError as e:
                    if e.status == 429 and attempt < max_retries - 1:
                        retry_after = 1
                        if hasattr(e, "headers") and e.headers:
                            retry_after = int(e.headers.get("Retry-After", 1))
                        logger.warning(
                            f"Rate limited, retrying in {retry_after}s "
                            f"(attempt {attempt + 1}/{max_retries})"
                        )
                        time.sleep(retry_after)
                        continue
                    raise
            return None  # Unreachable but satisfies type checker
        return wrapper
    return decorator


class NotionClient:
    """Throttled wrapper around the Notion SDK client.

    Every request waits on the rate limiter and is retried automatically
    if Notion answers with 429.
    """

    def __init__(self, token: str, rate_limiter: RateLimiter | None = None):
        """Initialize the client.

        Args:
            token: Notion integration token.
            rate_limiter: RateLimiter instance to throttle requests.
        """
        self._client = Client(auth=token)
        self._rate_limiter = rate_limiter or RateLimiter()

    @retry_on_rate_limit()
    def get_page(self, page_id: str) -> dict:
        """Retrieve a page by ID."""
        self._rate_limiter.acquire()
        return self._client.pages.retrieve(page_id=page_id)

    @retry_on_rate_limit()
    def get_blocks(self, block_id: str) -> list[dict]:
        """Retrieve all child blocks of a block/page."""
        self._rate_limiter.acquire()
        return collect_paginated_api(
            self._client.blocks.children.list,
            block_id=block_id,
        )
