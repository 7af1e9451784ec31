"""Tests for cart scope"""
import pytest

from cartsync.cart import CartManager
from cartsync.context import cart_scope, use_cart
from cartsync.errors import CartContextError
from cartsync.storage import InMemoryStore


def test_use_cart_outside_scope():
    """Test using the cart without a scope is a fatal integration error."""
    with pytest.raises(CartContextError, match="use_cart must be used within a cart_scope"):
        use_cart()


def test_scope_provides_manager(store, sample_product):
    """Test consumers inside the scope share one cart."""
    with cart_scope(store=store, storage_key="scoped-cart") as cart:
        use_cart().add_item(sample_product, 2)

        assert use_cart() is cart
        assert cart.get_item_count() == 2
        assert "scoped-cart" in store


def test_scope_accepts_existing_manager(store):
    """Test an injected manager is exposed as-is."""
    manager = CartManager(store=store)
    with cart_scope(manager) as cart:
        assert cart is manager
        assert use_cart() is manager


def test_scope_leaves_injected_manager_open(store, sample_product):
    """Test the owner of an injected manager keeps its subscribers after the scope."""
    manager = CartManager(store=store)
    seen = []
    manager.notifications.subscribe(seen.append)

    with cart_scope(manager):
        use_cart().add_item(sample_product)

    assert len(manager.notifications) == 1
    manager.add_item(sample_product)
    assert len(seen) == 2


def test_scope_exit_resets_and_closes(store):
    """Test leaving the scope hides the cart and drops subscribers."""
    with cart_scope(store=store) as cart:
        cart.notifications.subscribe(lambda event: None)

    assert len(cart.notifications) == 0
    with pytest.raises(CartContextError):
        use_cart()


def test_nested_scopes(sample_product):
    """Test inner scopes shadow and then restore the outer cart."""
    with cart_scope(store=InMemoryStore()) as outer:
        with cart_scope(store=InMemoryStore()) as inner:
            use_cart().add_item(sample_product)
            assert use_cart() is inner
        assert use_cart() is outer
        assert outer.get_item_count() == 0
