"""Cart listing ("my carts" overview)."""
from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional

from groupkart.domain.Cart import Cart, CartState
from groupkart.logic.reporting.summary import total_spent


def carts_for_user(state: CartState, user_id: str) -> List[Cart]:
    """Carts the user belongs to, in creation order."""
    return [c for c in state.carts.values() if c.has_user(user_id)]


def aggregate_savings(carts: Iterable[Cart]) -> float:
    return sum(c.total_savings for c in carts)


def cart_card(cart: Cart) -> Dict[str, Any]:
    return {
        'id': cart.id,
        'name': cart.name,
        'is_group': cart.is_group,
        'users': [u.name for u in cart.users],
        'item_count': len(cart.items),
        'total_spent': total_spent(cart),
        'total_savings': cart.total_savings,
        'smart_swaps_accepted': cart.smart_swaps_accepted,
        # only categories with an actual limit are shown
        'budgets': {k: v for k, v in cart.category_budgets.items() if v and v > 0},
    }


def list_cart_cards(state: CartState, user_id: Optional[str] = None) -> List[Dict[str, Any]]:
    carts = carts_for_user(state, user_id) if user_id else list(state.carts.values())
    return [cart_card(c) for c in carts]

__all__ = ['carts_for_user', 'aggregate_savings', 'cart_card', 'list_cart_cards']
