"""Application service: the local cart store.

The single owner of the persisted cart. Each mutation loads the cart,
applies the change through the Cart aggregate, persists the full list,
and only then publishes ``cartUpdated``.
"""

from __future__ import annotations

from freshcart.application.dto import CartDTO, CartLineDTO
from freshcart.application.events import CART_UPDATED, EventBus
from freshcart.domain.model.cart import Cart, CartLine
from freshcart.domain.model.product import Product
from freshcart.domain.model.value_objects import Money, ProductKey
from freshcart.domain.repository.cart_repository import CartRepository


class LocalCartStore:

    def __init__(self, cart_repo: CartRepository, events: EventBus) -> None:
        self._cart_repo = cart_repo
        self._events = events
        self._revision = 0

    # --- Mutations ------------------------------------------------------------

    def add(self, item: Product | CartLine, quantity: int = 1) -> None:
        """Add a product, or bump the quantity if it is already in the cart."""
        line = item if isinstance(item, CartLine) else CartLine.from_product(item, quantity)
        cart = self._cart_repo.load()
        cart.add(line)
        self._commit(cart)

    def set_quantity(self, key: ProductKey, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        cart = self._cart_repo.load()
        cart.set_quantity(key, quantity)
        self._commit(cart)

    def remove(self, key: ProductKey) -> None:
        cart = self._cart_repo.load()
        cart.remove(key)
        self._commit(cart)

    def clear(self) -> None:
        self._cart_repo.clear()
        self._revision += 1
        self._events.emit(CART_UPDATED)

    # --- Queries --------------------------------------------------------------

    def list(self) -> list[CartLine]:
        return list(self._cart_repo.load().lines)

    def cart(self) -> Cart:
        return self._cart_repo.load()

    def raw_lines(self) -> list[dict]:
        """Stored lines untouched, for the secure order composer."""
        return self._cart_repo.load_raw()

    def total_quantity(self) -> int:
        return self._cart_repo.load().total_quantity

    def subtotal(self) -> Money:
        return self._cart_repo.load().subtotal

    def savings(self) -> Money:
        return self._cart_repo.load().savings

    @property
    def revision(self) -> int:
        """Bumped on every mutation made through this store."""
        return self._revision

    def summary(self) -> CartDTO:
        cart = self._cart_repo.load()
        return CartDTO(
            items=[
                CartLineDTO(
                    key=str(line.key),
                    name=line.snapshot.name,
                    quantity=line.quantity.value,
                    unit_price=str(line.snapshot.price.displayed),
                    line_total=str(line.line_total),
                )
                for line in cart.lines
            ],
            total_quantity=cart.total_quantity,
            subtotal=str(cart.subtotal),
            savings=str(cart.savings),
        )

    # --- Internal helpers -----------------------------------------------------

    def _commit(self, cart: Cart) -> None:
        self._cart_repo.save(cart)
        self._revision += 1
        self._events.emit(CART_UPDATED, cart.total_quantity)
