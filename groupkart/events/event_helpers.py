"""Event helper utilities.

Helpers that publish the caller-side cart alerts (allergy conflicts and
budget overruns) on a given event bus. The store itself never emits alerts.

Quick import:
    from groupkart.events.event_helpers import (
        publish_allergy_alert, publish_budget_alert,
        CART_ALLERGY_ALERT, CART_BUDGET_ALERT
    )
"""
from __future__ import annotations
from typing import Iterable, Any
from .Event_Bus import (
    EventBus,
    CART_ALLERGY_ALERT, CART_BUDGET_ALERT, CART_STATE_CHANGED
)

__all__ = [
    'publish_allergy_alert', 'publish_budget_alert', 'describe_allergy_alert',
    'CART_ALLERGY_ALERT', 'CART_BUDGET_ALERT', 'CART_STATE_CHANGED'
]


def describe_allergy_alert(users: Iterable[Any]) -> str:
    """Human readable line, e.g. 'Alice and Bob are allergic ...'."""
    names = [getattr(u, 'name', str(u)) for u in users]
    verb = 'is' if len(names) == 1 else 'are'
    return f"{', '.join(names)} {verb} allergic to ingredients in this item."


def publish_allergy_alert(bus: EventBus, cart_id: str, item_name: str, users: Iterable[Any]):
    """Publish a cart.allergy_alert event (skipped when nobody conflicts)."""
    users_list = list(users)
    if not users_list:
        return
    bus.publish(CART_ALLERGY_ALERT, {
        'cart_id': cart_id,
        'item_name': item_name,
        'users': users_list,
        'message': describe_allergy_alert(users_list),
    })


def publish_budget_alert(bus: EventBus, cart_id: str, category: str, over_by: float):
    """Publish a cart.budget_alert event."""
    bus.publish(CART_BUDGET_ALERT, {
        'cart_id': cart_id,
        'category': category,
        'over_by': over_by,
    })
