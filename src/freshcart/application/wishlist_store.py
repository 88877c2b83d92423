"""Application service: the local wishlist store.

Wishlist mutations belong to a logged-in customer. Without a ``userId``
in local storage the mutation is refused with LoginRequired so the
caller can show the login prompt instead.
"""

from __future__ import annotations

from freshcart.application.auth_session import AuthSession
from freshcart.application.cart_store import LocalCartStore
from freshcart.application.events import WISHLIST_UPDATED, EventBus
from freshcart.domain.exceptions import EntityNotFoundError, LoginRequired
from freshcart.domain.model.cart import CartLine
from freshcart.domain.model.product import Product
from freshcart.domain.model.value_objects import ProductKey, Quantity
from freshcart.domain.model.wishlist import Wishlist, WishlistEntry
from freshcart.domain.repository.cart_repository import WishlistRepository


class WishlistStore:

    def __init__(
        self,
        wishlist_repo: WishlistRepository,
        session: AuthSession,
        events: EventBus,
        cart_store: LocalCartStore,
    ) -> None:
        self._wishlist_repo = wishlist_repo
        self._session = session
        self._events = events
        self._cart_store = cart_store

    def toggle(self, product: Product) -> bool:
        """Add or remove *product*; True when it is now in the wishlist."""
        self._require_login()
        wishlist = self._wishlist_repo.load()
        present = wishlist.toggle(WishlistEntry.from_product(product))
        self._commit(wishlist)
        return present

    def remove(self, key: ProductKey) -> None:
        self._require_login()
        wishlist = self._wishlist_repo.load()
        if not wishlist.contains(key):
            raise EntityNotFoundError(f"Item {key} is not in the wishlist")
        wishlist.remove(key)
        self._commit(wishlist)

    def move_to_cart(self, key: ProductKey) -> None:
        """Add one unit of the entry to the cart, then drop it from the wishlist."""
        self._require_login()
        wishlist = self._wishlist_repo.load()
        entry = wishlist.find(key)
        if entry is None:
            raise EntityNotFoundError(f"Item {key} is not in the wishlist")

        self._cart_store.add(
            CartLine(
                key=entry.key,
                quantity=Quantity(1),
                snapshot=entry.snapshot,
                is_subscription=entry.is_subscription,
                number_of_days=entry.number_of_days,
            )
        )
        wishlist.remove(key)
        self._commit(wishlist)

    def list(self) -> list[WishlistEntry]:
        return list(self._wishlist_repo.load().entries)

    def contains(self, key: ProductKey) -> bool:
        return self._wishlist_repo.load().contains(key)

    # --- Internal helpers -----------------------------------------------------

    def _require_login(self) -> None:
        if not self._session.is_logged_in:
            raise LoginRequired("Please login to manage your wishlist")

    def _commit(self, wishlist: Wishlist) -> None:
        self._wishlist_repo.save(wishlist)
        self._events.emit(WISHLIST_UPDATED, len(wishlist.entries))
