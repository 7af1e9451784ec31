"""
Cart scope.

One cart instance is shared by everything running inside a scope
(a UI session, a request, a bot conversation). Consumers fetch it with
``use_cart()`` instead of importing a module-level singleton.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from cartsync.errors import ERROR_NO_CART_SCOPE, CartContextError
from cartsync.cart import CartManager

_current_cart: ContextVar[Optional[CartManager]] = ContextVar("_current_cart", default=None)


@contextmanager
def cart_scope(manager: Optional[CartManager] = None, **kwargs) -> Iterator[CartManager]:
    """
    Provide a cart to everything inside the ``with`` block.

    Builds a CartManager from ``kwargs`` (store, storage_key, notifications)
    when none is passed. Only a manager built here is closed on exit;
    an injected one keeps its subscribers.

    Usage:
        with cart_scope(store=RedisStore()) as cart:
            render_navbar()  # calls use_cart().get_item_count()
    """
    owned = manager is None
    if owned:
        manager = CartManager(**kwargs)
    token = _current_cart.set(manager)
    try:
        yield manager
    finally:
        _current_cart.reset(token)
        if owned:
            manager.close()


def use_cart() -> CartManager:
    """
    Get the cart of the enclosing scope.

    Raises:
        CartContextError: called outside of ``cart_scope``
    """
    manager = _current_cart.get()
    if manager is None:
        raise CartContextError(ERROR_NO_CART_SCOPE)
    return manager
