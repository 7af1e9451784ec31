"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import Mock

# Keep tests off any real Redis
os.environ.setdefault("CART_STORAGE_KEY", "campgrounds-cart")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from cartsync.cart import CartManager
from cartsync.catalog import MenuItem, Product
from cartsync.storage import InMemoryStore

CART_KEY = "campgrounds-cart"


@pytest.fixture
def store():
    """Empty in-memory store"""
    return InMemoryStore()


@pytest.fixture
def notifications_log():
    """List collecting every emitted notification"""
    return []


@pytest.fixture
def manager(store, notifications_log):
    """Cart manager over an empty store, with a recording subscriber"""
    cart = CartManager(store=store, storage_key=CART_KEY)
    cart.notifications.subscribe(notifications_log.append)
    return cart


@pytest.fixture
def sample_product():
    """Shop product"""
    return Product(
        _id="prod-beans-1",
        name="House Blend Beans",
        description="Medium roast, 12oz",
        price=5,
        category="coffee",
        pointsEarned=10,
        inStock=True,
    )


@pytest.fixture
def sample_menu_item():
    """Cafe drink"""
    return MenuItem(
        _id="menu-latte-1",
        name="Latte",
        description="Espresso with steamed milk",
        price=3,
        category="drinks",
        itemType="DrinkItem",
        preparationTime=5,
    )


@pytest.fixture
def mock_redis():
    """Mock Upstash Redis client"""
    redis = Mock()
    redis.get.return_value = None
    redis.set.return_value = True
    redis.delete.return_value = 1
    redis.xadd.return_value = "1700000000000-0"
    return redis
