"""Tests for cart notifications and the Redis Streams sink"""
import json
from unittest.mock import Mock

from cartsync.notifications import CartNotification, NotificationBus, Severity
from cartsync.realtime import RedisStreamNotifier


class TestNotificationBus:
    """Tests for subscriber fan-out."""

    def test_emit_to_all_subscribers(self):
        """Test every subscriber receives the event."""
        bus = NotificationBus()
        first, second = [], []
        bus.subscribe(first.append)
        bus.subscribe(second.append)

        bus.success("Latte added to cart!")

        assert first == second == [CartNotification(Severity.SUCCESS, "Latte added to cart!")]

    def test_subscribe_is_idempotent(self):
        """Test the same callback is only registered once."""
        bus = NotificationBus()
        seen = []
        bus.subscribe(seen.append)
        bus.subscribe(seen.append)

        bus.info("Cart cleared")

        assert len(bus) == 1
        assert len(seen) == 1

    def test_unsubscribe_handle(self):
        """Test the returned handle detaches the subscriber."""
        bus = NotificationBus()
        seen = []
        unsubscribe = bus.subscribe(seen.append)

        unsubscribe()
        bus.info("Cart cleared")

        assert seen == []

    def test_failing_subscriber_does_not_block_others(self, caplog):
        """Test a raising subscriber is logged and delivery continues."""
        bus = NotificationBus()
        seen = []
        bus.subscribe(Mock(side_effect=RuntimeError("toast crashed")))
        bus.subscribe(seen.append)

        bus.info("Item removed from cart")

        assert len(seen) == 1
        assert "toast crashed" in caplog.text

    def test_to_dict(self):
        """Test serialization for transport."""
        event = CartNotification(Severity.INFO, "Cart cleared")
        assert event.to_dict() == {"severity": "info", "message": "Cart cleared"}


class TestRedisStreamNotifier:
    """Tests for the realtime stream sink."""

    def test_xadd_payload(self, mock_redis):
        """Test events are appended to the session stream."""
        notifier = RedisStreamNotifier("session-42", redis=mock_redis)

        notifier(CartNotification(Severity.SUCCESS, "Mug added to cart!"))

        stream_key, entry_id, fields = mock_redis.xadd.call_args[0]
        assert stream_key == "stream:realtime:cart:session-42"
        assert entry_id == "*"
        assert json.loads(fields["data"]) == {
            "event": "cart.notification",
            "severity": "success",
            "message": "Mug added to cart!",
        }

    def test_failure_is_logged(self, mock_redis, caplog):
        """Test a Redis error does not escape the subscriber."""
        mock_redis.xadd.side_effect = ConnectionError("stream unavailable")
        notifier = RedisStreamNotifier("session-42", redis=mock_redis)

        notifier(CartNotification(Severity.INFO, "Cart cleared"))

        assert "stream unavailable" in caplog.text

    def test_subscribed_to_cart(self, manager, sample_product, mock_redis):
        """Test the sink receives cart mutations."""
        manager.notifications.subscribe(RedisStreamNotifier("session-42", redis=mock_redis))

        manager.add_item(sample_product)
        manager.clear()

        assert mock_redis.xadd.call_count == 2
