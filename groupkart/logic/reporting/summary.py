"""Cart summary report: totals, savings, smart saver score, contributions.

Provides build_cart_summary(store, cart_id) plus the small helpers it is made of.
"""
from __future__ import annotations
from typing import Any, Dict, Optional

from groupkart.domain.Cart import Cart
from groupkart.logic.budget.tracker import budget_overview
from groupkart.logic.store.cart_store import CartStore
from groupkart.utilities.constants import (
    SCORE_BADGES,
    SCORE_POINTS_FOR_ITEMS,
    SCORE_POINTS_PER_SAVED_PERCENT,
    SCORE_POINTS_PER_SWAP,
)
from groupkart.utilities.rounding import round_half_up

__all__ = ["total_spent", "total_budget", "savings_percentage", "smart_saver_score",
           "score_badge", "build_cart_summary"]


def total_spent(cart: Cart) -> float:
    return sum(i.price for i in cart.items)


def total_budget(cart: Cart) -> float:
    return sum(b or 0 for b in cart.category_budgets.values())


def savings_percentage(cart: Cart) -> float:
    """Savings as a percentage of the summed category budgets (0 without budgets)."""
    budget = total_budget(cart)
    return cart.total_savings / budget * 100 if budget > 0 else 0


def smart_saver_score(cart: Cart) -> int:
    raw = (cart.smart_swaps_accepted * SCORE_POINTS_PER_SWAP
           + savings_percentage(cart) * SCORE_POINTS_PER_SAVED_PERCENT
           + (SCORE_POINTS_FOR_ITEMS if cart.items else 0))
    return min(100, round_half_up(raw))


def score_badge(score: int) -> str:
    for minimum, label in SCORE_BADGES:
        if score >= minimum:
            return label
    return SCORE_BADGES[-1][1]


def build_cart_summary(store: CartStore, cart_id: str) -> Optional[Dict[str, Any]]:
    cart = store.get_cart(cart_id)
    if cart is None:
        return None
    spent = total_spent(cart)
    contributions = []
    for user in cart.users:
        amount = store.get_user_contribution(cart_id, user.id)
        contributions.append({
            'user_id': user.id,
            'name': user.name,
            'amount': amount,
            'percentage': amount / spent * 100 if spent > 0 else 0,
            'items': sum(1 for i in cart.items if i.added_by == user.id),
        })
    score = smart_saver_score(cart)
    return {
        'cart_id': cart.id,
        'name': cart.name,
        'is_group': cart.is_group,
        'item_count': len(cart.items),
        'total_spent': spent,
        'total_budget': total_budget(cart),
        'total_savings': store.get_total_savings(cart_id),
        'savings_percentage': savings_percentage(cart),
        'smart_swaps_accepted': cart.smart_swaps_accepted,
        'smart_saver_score': score,
        'badge': score_badge(score),
        'contributions': contributions,
        'budgets': budget_overview(store, cart_id),
    }
