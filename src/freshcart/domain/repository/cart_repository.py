"""Abstract repositories for the client-held cart and wishlist.

Defined in the domain layer so the stores never depend on how the lines
are encoded. The storage-backed implementation lives in infrastructure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from freshcart.domain.model.cart import Cart
from freshcart.domain.model.wishlist import Wishlist


class CartRepository(ABC):

    @abstractmethod
    def load(self) -> Cart:
        """Return the persisted cart; unreadable entries are skipped."""

    @abstractmethod
    def load_raw(self) -> list[dict]:
        """Return the persisted lines exactly as stored (dicts only)."""

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Persist the full cart, replacing what was stored."""

    @abstractmethod
    def clear(self) -> None:
        """Forget the cart entirely."""


class WishlistRepository(ABC):

    @abstractmethod
    def load(self) -> Wishlist:
        """Return the persisted wishlist."""

    @abstractmethod
    def save(self, wishlist: Wishlist) -> None:
        """Persist the full wishlist."""
