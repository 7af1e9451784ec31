"""Realtime Module - Mirror cart notifications into Redis Streams.

Lets another frontend (or a bot) tail cart activity for a session.
Uses the same Upstash Redis client as the cart store.
"""

import json
from typing import Optional

from upstash_redis import Redis

from cartsync.logging import get_logger, loggable
from cartsync.notifications import CartNotification
from cartsync.storage import get_redis_sync

logger = get_logger(__name__)


_STREAM_PREFIX_CART = "stream:realtime:cart:"


class RedisStreamNotifier:
    """Notification subscriber that XADDs each event to a per-session stream.

    Usage:
        notifier = RedisStreamNotifier(session_id)
        manager.notifications.subscribe(notifier)
    """

    def __init__(self, stream_id: str, redis: Optional[Redis] = None):
        self.stream_key = f"{_STREAM_PREFIX_CART}{stream_id}"
        self._redis = redis

    @property
    def redis(self) -> Redis:
        if self._redis is None:
            self._redis = get_redis_sync()
        return self._redis

    def __call__(self, notification: CartNotification) -> None:
        try:
            payload = {
                "event": "cart.notification",
                **notification.to_dict(),
            }
            self.redis.xadd(self.stream_key, "*", {"data": json.dumps(payload)})
            logger.debug(
                f"Emitted cart.notification to {loggable(self.stream_key, 80)}"
            )
        except Exception as e:
            logger.warning(f"Failed to emit cart.notification: {e}", exc_info=True)
