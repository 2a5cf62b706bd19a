# =============================================================================
# app/revalidation/broadcast.py - View Invalidation Publishing
# =============================================================================
# Every successful catalog mutation tells the renderer which cached views
# to rebuild. Events go through Redis pub/sub so any API worker process can
# publish and the process holding renderer WebSockets can forward them:
# - Services call invalidator.invalidate(paths)
# - The API lifespan listener subscribes and broadcasts to renderers
#
# Event shape:
#   {"type": "revalidate", "paths": ["/admin/produk", "/galeri", "/"]}
# =============================================================================

import json
import logging

logger = logging.getLogger(__name__)

# Redis channel for revalidation events
REVALIDATE_CHANNEL = "kue:revalidate"


def build_event(paths: list[str]) -> dict:
    """Build the revalidation event payload (paths de-duplicated, order kept)."""
    return {
        "type": "revalidate",
        "paths": list(dict.fromkeys(paths)),
    }


class ViewInvalidator:
    """
    Receives the views a mutation invalidates.

    Implementations must not raise: a failed publish never fails the
    mutation that triggered it.
    """

    def invalidate(self, paths: list[str]) -> bool:
        raise NotImplementedError


class NullViewInvalidator(ViewInvalidator):
    """Used when revalidation is disabled; only logs."""

    def invalidate(self, paths: list[str]) -> bool:
        logger.debug(f"Revalidation disabled, skipping: {paths}")
        return False


class RedisViewInvalidator(ViewInvalidator):
    """Publishes revalidation events on the Redis channel."""

    def __init__(self, redis_url: str, channel: str = REVALIDATE_CHANNEL):
        self.redis_url = redis_url
        self.channel = channel
        self._client = None

    def get_redis_client(self):
        """Get (lazily) a Redis client for publishing."""
        if self._client is None:
            import redis
            self._client = redis.from_url(self.redis_url)
        return self._client

    def invalidate(self, paths: list[str]) -> bool:
        """
        Publish a revalidation event.

        Returns:
            bool: True if published successfully
        """
        if not paths:
            return False

        try:
            message = json.dumps(build_event(paths))
            self.get_redis_client().publish(self.channel, message)
            logger.debug(f"Published revalidation for {paths}")
            return True

        except Exception as e:
            logger.error(f"Failed to publish revalidation event: {e}")
            return False
