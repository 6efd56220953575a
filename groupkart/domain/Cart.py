"""Cart aggregate and the whole-store snapshot (CartState).

Both are frozen: every change produces a new value (see logic.store.cart_store).
"""
from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from groupkart.domain.CartItem import CartItem
from groupkart.domain.User import User


def _frozen_mapping(values) -> Mapping:
    return MappingProxyType(dict(values or {}))


@dataclass(frozen=True, eq=False)
class Cart:
    id: str
    name: str
    users: Tuple[User, ...] = field(default_factory=tuple)
    category_budgets: Mapping[str, float] = field(default_factory=dict)
    items: Tuple[CartItem, ...] = field(default_factory=tuple)
    total_savings: float = 0
    smart_swaps_accepted: int = 0

    def __post_init__(self):
        object.__setattr__(self, "users", tuple(self.users))
        object.__setattr__(self, "items", tuple(self.items))
        object.__setattr__(self, "category_budgets", _frozen_mapping(self.category_budgets))

    def budget_for(self, category: str) -> float:
        '''Spending limit for a category; 0 means unlimited / not set.'''
        return self.category_budgets.get(category, 0) or 0

    def find_item(self, item_id: str) -> Optional[CartItem]:
        return next((i for i in self.items if i.id == item_id), None)

    def has_user(self, user_id: str) -> bool:
        return any(u.id == user_id for u in self.users)

    @property
    def is_group(self) -> bool:
        return len(self.users) > 1

    def __eq__(self, other):
        if not isinstance(other, Cart):
            return NotImplemented
        return (self.id, self.name, self.users, dict(self.category_budgets), self.items,
                self.total_savings, self.smart_swaps_accepted) == \
               (other.id, other.name, other.users, dict(other.category_budgets), other.items,
                other.total_savings, other.smart_swaps_accepted)

    def __str__(self) -> str:
        return (f"Cart {self.name} ({self.id}) - {len(self.users)} users - {len(self.items)} items"
                f" - Savings: {self.total_savings}")

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        budgets = d.get("categoryBudgets", d.get("category_budgets")) or {}
        return Cart(
            id=str(d.get("id", "")),
            name=str(d.get("name", "")),
            users=tuple(User.from_dict(u) for u in d.get("users", []) or []),
            category_budgets={str(k): v or 0 for k, v in budgets.items()},
            items=tuple(CartItem.from_dict(i) for i in d.get("items", []) or []),
            total_savings=d.get("totalSavings", d.get("total_savings", 0)) or 0,
            smart_swaps_accepted=int(d.get("smartSwapsAccepted", d.get("smart_swaps_accepted", 0)) or 0),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "users": [u.to_dict() for u in self.users],
            "categoryBudgets": dict(self.category_budgets),
            "items": [i.to_dict() for i in self.items],
            "totalSavings": self.total_savings,
            "smartSwapsAccepted": self.smart_swaps_accepted,
        }


@dataclass(frozen=True, eq=False)
class CartState:
    """Everything the store owns: carts keyed by id and the current user pointer."""
    carts: Mapping[str, Cart] = field(default_factory=dict)
    current_user: Optional[User] = None

    def __post_init__(self):
        object.__setattr__(self, "carts", _frozen_mapping(self.carts))

    def __eq__(self, other):
        if not isinstance(other, CartState):
            return NotImplemented
        return dict(self.carts) == dict(other.carts) and self.current_user == other.current_user

    def with_cart(self, cart: Cart) -> "CartState":
        carts: Dict[str, Cart] = dict(self.carts)
        carts[cart.id] = cart
        return CartState(carts=carts, current_user=self.current_user)

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        raw_carts = d.get("carts") or {}
        carts = {}
        for key, raw in raw_carts.items():
            cart = Cart.from_dict(raw)
            carts[cart.id or key] = cart
        current = d.get("currentUser", d.get("current_user"))
        return CartState(carts=carts, current_user=User.from_dict(current) if current else None)

    def to_dict(self):
        return {
            "carts": {cid: c.to_dict() for cid, c in self.carts.items()},
            "currentUser": self.current_user.to_dict() if self.current_user else None,
        }
