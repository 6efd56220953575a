"""Cart state engine.

CartStore owns a CartState snapshot (carts keyed by id + current user) and
exposes commands that replace the snapshot and queries that derive figures
from it.

Rules:
  - Unknown cart / item ids never raise. Commands become no-ops (return False
    or None) and queries return 0, [] or None.
  - Every successful command builds new Cart / CartState values; snapshots
    already handed to readers are never mutated.
  - After a successful command the new snapshot is published as
    cart.state_changed on the store's event bus (persistence listens there).
  - Allergy and budget checks are the caller's job; add_item_to_cart never
    blocks or warns.
"""
from __future__ import annotations
import logging
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Mapping, Optional

from groupkart.domain.Cart import Cart, CartState
from groupkart.domain.CartItem import CartItem, swap_from_dict
from groupkart.domain.User import User, new_id
from groupkart.events.Event_Bus import EventBus, CART_STATE_CHANGED

logger = logging.getLogger(__name__)


def _item_field(data: Mapping[str, Any], snake: str, camel: str, default=None):
    if snake in data:
        return data[snake]
    return data.get(camel, default)


class CartStore:
    def __init__(self, state: Optional[CartState] = None, event_bus: Optional[EventBus] = None):
        self._state = state if state is not None else CartState()
        self._event_bus = event_bus if event_bus is not None else EventBus()

    # --- Snapshot access ----------------------------------------------------
    @property
    def state(self) -> CartState:
        return self._state

    @property
    def carts(self) -> Mapping[str, Cart]:
        return self._state.carts

    @property
    def current_user(self) -> Optional[User]:
        return self._state.current_user

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    def _commit(self, new_state: CartState, command: str, **details):
        self._state = new_state
        logger.debug("%s applied %s", command, details)
        self._event_bus.publish(CART_STATE_CHANGED, new_state)

    # --- Commands -----------------------------------------------------------
    def create_cart(self, name: str, users: Iterable[User] = (),
                    category_budgets: Optional[Mapping[str, float]] = None) -> str:
        '''
        Creates an empty cart and returns its new id. Names need not be unique.
        Categories missing from category_budgets are unlimited (0).
        '''
        cart_id = new_id()
        while cart_id in self._state.carts:
            cart_id = new_id()
        cart = Cart(
            id=cart_id,
            name=name,
            users=tuple(users),
            category_budgets=dict(category_budgets or {}),
        )
        self._commit(self._state.with_cart(cart), "create_cart", cart_id=cart_id, name=name)
        return cart_id

    def add_item_to_cart(self, cart_id: str, item_data: Optional[Mapping[str, Any]] = None,
                         **fields) -> Optional[str]:
        '''
        Appends an item built from item_data (name, price, category, ingredients,
        added_by/addedBy, suggested_swap/suggestedSwap) and returns the new item id.
        Returns None and changes nothing when the cart does not exist.
        Raises ValueError for a negative price or a swap priced above the item.
        '''
        cart = self._state.carts.get(cart_id)
        if cart is None:
            return None
        data: Dict[str, Any] = dict(item_data or {})
        data.update(fields)
        item_id = new_id()
        while cart.find_item(item_id) is not None:
            item_id = new_id()
        item = CartItem(
            id=item_id,
            name=data.get("name", ""),
            price=data.get("price", 0),
            category=data.get("category", ""),
            ingredients=tuple(data.get("ingredients") or ()),
            added_by=_item_field(data, "added_by", "addedBy", ""),
            swap=swap_from_dict(_item_field(data, "suggested_swap", "suggestedSwap")),
        )
        updated = replace(cart, items=cart.items + (item,))
        self._commit(self._state.with_cart(updated), "add_item_to_cart", cart_id=cart_id, item_id=item_id)
        return item_id

    def remove_item_from_cart(self, cart_id: str, item_id: str) -> bool:
        '''
        Deletes the item permanently. Savings and swap counters are history and stay as they are.
        '''
        cart = self._state.carts.get(cart_id)
        if cart is None or cart.find_item(item_id) is None:
            return False
        updated = replace(cart, items=tuple(i for i in cart.items if i.id != item_id))
        self._commit(self._state.with_cart(updated), "remove_item_from_cart", cart_id=cart_id, item_id=item_id)
        return True

    def accept_swap(self, cart_id: str, item_id: str) -> bool:
        '''
        Takes the item's pending swap: name/price replaced, swap cleared,
        smart_swaps_accepted += 1 and total_savings += old price - swap price.
        No-op if the cart or item is missing or nothing is pending, so a second
        call on the same item changes nothing.
        '''
        cart = self._state.carts.get(cart_id)
        if cart is None:
            return False
        original = cart.find_item(item_id)
        if original is None or not original.has_pending_swap:
            return False
        # Delta comes from the pre-swap snapshot
        savings = original.price - original.suggested_swap.price
        swapped = original.with_swap_applied()
        updated = replace(
            cart,
            items=tuple(swapped if i.id == item_id else i for i in cart.items),
            smart_swaps_accepted=cart.smart_swaps_accepted + 1,
            total_savings=cart.total_savings + savings,
        )
        self._commit(self._state.with_cart(updated), "accept_swap",
                     cart_id=cart_id, item_id=item_id, savings=savings)
        return True

    def add_user_to_cart(self, cart_id: str, user: User) -> bool:
        '''Appends the user unless one with the same id is already in the cart.'''
        cart = self._state.carts.get(cart_id)
        if cart is None or cart.has_user(user.id):
            return False
        updated = replace(cart, users=cart.users + (user,))
        self._commit(self._state.with_cart(updated), "add_user_to_cart", cart_id=cart_id, user_id=user.id)
        return True

    def set_current_user(self, user: Optional[User]) -> bool:
        '''Plain pointer assignment, not checked against any cart.'''
        new_state = CartState(carts=self._state.carts, current_user=user)
        self._commit(new_state, "set_current_user", user_id=user.id if user else None)
        return True

    # --- Queries ------------------------------------------------------------
    def get_cart(self, cart_id: str) -> Optional[Cart]:
        return self._state.carts.get(cart_id)

    def get_category_spent(self, cart_id: str, category: str) -> float:
        cart = self.get_cart(cart_id)
        if cart is None:
            return 0
        return sum(i.price for i in cart.items if i.category == category)

    def get_user_contribution(self, cart_id: str, user_id: str) -> float:
        cart = self.get_cart(cart_id)
        if cart is None:
            return 0
        return sum(i.price for i in cart.items if i.added_by == user_id)

    def get_total_savings(self, cart_id: str) -> float:
        cart = self.get_cart(cart_id)
        return cart.total_savings if cart is not None else 0

    def check_allergy_conflicts(self, cart_id: str, ingredients: Iterable[str]) -> List[User]:
        """Users (in cart order) with an allergy contained, case-insensitively, in some ingredient."""
        cart = self.get_cart(cart_id)
        if cart is None:
            return []
        ingredients = list(ingredients)
        return [u for u in cart.users if u.is_allergic_to_any(ingredients)]


__all__ = ["CartStore"]
