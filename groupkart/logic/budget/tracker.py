"""Budget tracking helpers built on top of CartStore queries.

A category budget of 0 (or a category with no budget) means unlimited.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional

from groupkart.logic.store.cart_store import CartStore

__all__ = ["budget_progress", "budget_alert", "budget_overview"]


def budget_progress(store: CartStore, cart_id: str, category: str) -> float:
    """Percentage of the category budget already spent (may exceed 100); 0 when unlimited."""
    cart = store.get_cart(cart_id)
    if cart is None:
        return 0
    budget = cart.budget_for(category)
    if budget <= 0:
        return 0
    return store.get_category_spent(cart_id, category) / budget * 100


def budget_alert(store: CartStore, cart_id: str, category: str, price: float) -> Optional[float]:
    """Amount by which adding an item of `price` would push the category over budget.

    Returns None when the cart is missing, the budget is unlimited or it would not be exceeded.
    """
    cart = store.get_cart(cart_id)
    if cart is None:
        return None
    budget = cart.budget_for(category)
    if budget <= 0:
        return None
    total = store.get_category_spent(cart_id, category) + price
    if total > budget:
        return total - budget
    return None


def budget_overview(store: CartStore, cart_id: str) -> List[Dict[str, Any]]:
    """One row per category with a positive budget, in budget insertion order."""
    cart = store.get_cart(cart_id)
    if cart is None:
        return []
    rows: List[Dict[str, Any]] = []
    for category, budget in cart.category_budgets.items():
        if not budget or budget <= 0:
            continue
        spent = store.get_category_spent(cart_id, category)
        progress = spent / budget * 100
        rows.append({
            'category': category,
            'budget': budget,
            'spent': spent,
            'progress': progress,
            'over_budget': progress > 100,
            'over_by': max(spent - budget, 0),
        })
    return rows
