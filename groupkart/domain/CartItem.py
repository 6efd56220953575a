"""CartItem domain entity plus its smart-swap state (NoSwapPending | SwapPending)."""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple, Union

from groupkart.domain.User import clean_tags


@dataclass(frozen=True)
class NoSwapPending:
    """No suggestion attached (never had one, or it was accepted)."""

    def to_dict(self):
        return None


@dataclass(frozen=True)
class SwapPending:
    name: str
    price: float
    reason: str = ""

    def __post_init__(self):
        if self.price < 0:
            raise ValueError(f"Swap price cannot be negative: {self.price}")

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return SwapPending(
            name=str(d.get("name", "")),
            price=d.get("price", 0) or 0,
            reason=str(d.get("reason", "") or ""),
        )

    def to_dict(self):
        return {"name": self.name, "price": self.price, "reason": self.reason}


NO_SWAP = NoSwapPending()
SwapState = Union[NoSwapPending, SwapPending]


def swap_from_dict(data) -> SwapState:
    '''Missing / null suggestedSwap means no swap pending.'''
    if isinstance(data, SwapPending):
        return data
    if not data:
        return NO_SWAP
    return SwapPending.from_dict(data)


@dataclass(frozen=True)
class CartItem:
    id: str
    name: str
    price: float
    category: str
    ingredients: Tuple[str, ...] = field(default_factory=tuple)
    added_by: str = ""
    swap: SwapState = NO_SWAP

    def __post_init__(self):
        if self.price < 0:
            raise ValueError(f"Price cannot be negative: {self.price}")
        if isinstance(self.swap, SwapPending) and self.swap.price > self.price:
            raise ValueError(f"Swap price {self.swap.price} is above the item price {self.price}")
        object.__setattr__(self, "ingredients", clean_tags(self.ingredients))

    @property
    def suggested_swap(self) -> Optional[SwapPending]:
        return self.swap if isinstance(self.swap, SwapPending) else None

    @property
    def has_pending_swap(self) -> bool:
        return isinstance(self.swap, SwapPending)

    def with_swap_applied(self) -> "CartItem":
        '''
        Returns the item after taking its pending swap (name/price replaced, swap cleared).
        Raises ValueError if no swap is pending; callers check has_pending_swap first.
        '''
        if isinstance(self.swap, SwapPending):
            return replace(self, name=self.swap.name, price=self.swap.price, swap=NO_SWAP)
        raise ValueError(f"Item '{self.id}' has no pending swap")

    def __str__(self) -> str:
        parts = [f"{self.name} - {self.price} ({self.category})"]
        if self.ingredients:
            parts.append("Ingredients: " + ", ".join(self.ingredients))
        if self.suggested_swap:
            parts.append(f"Swap: {self.suggested_swap.name} @ {self.suggested_swap.price}")
        return " - ".join(parts)

    @staticmethod
    def from_dict(data):
        '''Creates a CartItem from a dictionary (camelCase or snake_case keys). Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        return CartItem(
            id=str(d.get("id", "")),
            name=str(d.get("name", "")),
            price=d.get("price", 0) or 0,
            category=str(d.get("category", "")),
            ingredients=tuple(d.get("ingredients") or ()),
            added_by=str(d.get("addedBy", d.get("added_by", "")) or ""),
            swap=swap_from_dict(d.get("suggestedSwap", d.get("suggested_swap"))),
        )

    def to_dict(self):
        data = {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "category": self.category,
            "ingredients": list(self.ingredients),
            "addedBy": self.added_by,
        }
        if self.suggested_swap:
            data["suggestedSwap"] = self.suggested_swap.to_dict()
        return data
