"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from dataclasses import dataclass

from freshcart.application.auth_session import AuthSession
from freshcart.application.cart_store import LocalCartStore
from freshcart.application.catalog_cache import CatalogCache
from freshcart.application.checkout_session import CheckoutSession
from freshcart.application.coupon_evaluator import CouponEvaluator
from freshcart.application.create_secure_order import CreateSecureOrderHandler
from freshcart.application.customer_profile import CustomerProfileService
from freshcart.application.events import EventBus
from freshcart.application.list_customer_orders import ListCustomerOrdersHandler
from freshcart.application.payment_bridge import PaymentBridge
from freshcart.application.show_subscription import ShowSubscriptionHandler
from freshcart.application.wishlist_store import WishlistStore
from freshcart.domain.repository.payment_widget import PaymentWidget
from freshcart.domain.repository.shop_gateway import ShopGateway
from freshcart.domain.repository.storage import KeyValueStorage
from freshcart.infrastructure.config import Settings, get_settings
from freshcart.infrastructure.http.api_client import ShopApiClient
from freshcart.infrastructure.http.product_source import HttpProductSource
from freshcart.infrastructure.payment.terminal_widget import TerminalPaymentWidget
from freshcart.infrastructure.persistence.json_local_storage import JsonLocalStorage
from freshcart.infrastructure.persistence.static_catalog import StaticProductSource
from freshcart.infrastructure.persistence.storage_cart_repository import (
    StorageCartRepository,
    StorageWishlistRepository,
)


@dataclass
class Container:
    """Everything one CLI invocation needs, sharing one event bus."""

    settings: Settings
    storage: KeyValueStorage
    events: EventBus
    session: AuthSession
    gateway: ShopGateway
    cart: LocalCartStore
    wishlist: WishlistStore
    catalog: CatalogCache
    profiles: CustomerProfileService
    checkout: CheckoutSession
    subscriptions: ShowSubscriptionHandler
    order_history: ListCustomerOrdersHandler


def build_container(
    settings: Settings | None = None,
    storage: KeyValueStorage | None = None,
    gateway: ShopGateway | None = None,
    widget: PaymentWidget | None = None,
    offline_catalog: bool = False,
) -> Container:
    settings = settings or get_settings()
    storage = storage or JsonLocalStorage(settings.storage_path)
    events = EventBus()
    session = AuthSession(storage)
    gateway = gateway or ShopApiClient(settings.api_url, session, settings.request_timeout)

    cart = LocalCartStore(StorageCartRepository(storage), events)
    wishlist = WishlistStore(StorageWishlistRepository(storage), session, events, cart)
    source = StaticProductSource() if offline_catalog else HttpProductSource(gateway)
    profiles = CustomerProfileService(gateway, session, events)
    bridge = PaymentBridge(
        gateway,
        widget or TerminalPaymentWidget(),
        cart,
        widget_key=settings.razorpay_key_id,
        merchant_name=settings.merchant_name,
    )
    checkout = CheckoutSession(
        cart,
        events,
        CouponEvaluator(gateway),
        CreateSecureOrderHandler(gateway),
        bridge,
        profiles,
        session,
    )
    return Container(
        settings=settings,
        storage=storage,
        events=events,
        session=session,
        gateway=gateway,
        cart=cart,
        wishlist=wishlist,
        catalog=CatalogCache(source),
        profiles=profiles,
        checkout=checkout,
        subscriptions=ShowSubscriptionHandler(gateway),
        order_history=ListCustomerOrdersHandler(gateway, session),
    )
