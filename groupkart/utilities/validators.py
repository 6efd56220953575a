"""
Input validation schemas using Pydantic for the HTTP layer.
"""
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Dict, List, Optional

from groupkart.domain.CartItem import SwapPending
from groupkart.domain.User import User


def _strip_list(values):
    return [v.strip() for v in values if v and v.strip()]


class UserInput(BaseModel):
    """Schema for an existing user (id already generated)."""
    id: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=100)
    allergies: List[str] = Field(default_factory=list)

    @field_validator('name')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if not v.strip():
            raise ValueError('User name cannot be empty')
        return v.strip()

    @field_validator('allergies')
    @classmethod
    def validate_allergies(cls, v):
        return _strip_list(v)

    def to_user(self) -> User:
        return User(id=self.id, name=self.name, allergies=tuple(self.allergies))


class NewUserInput(BaseModel):
    """Schema for creating a user; the id is generated server side."""
    name: str = Field(..., min_length=1, max_length=100)
    allergies: List[str] = Field(default_factory=list)
    make_current: bool = False

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('User name cannot be empty')
        return v.strip()

    @field_validator('allergies')
    @classmethod
    def validate_allergies(cls, v):
        return _strip_list(v)


class CurrentUserInput(BaseModel):
    user: Optional[UserInput] = None


class CartCreateInput(BaseModel):
    """Schema for cart creation."""
    name: str = Field(..., min_length=1, max_length=200)
    users: List[UserInput] = Field(default_factory=list)
    category_budgets: Dict[str, float] = Field(default_factory=dict)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Validate cart name."""
        if not v.strip():
            raise ValueError('Cart name cannot be empty')
        return v.strip()

    @field_validator('category_budgets')
    @classmethod
    def validate_budgets(cls, v):
        """Budgets must not be negative (0 = unlimited)."""
        for category, limit in v.items():
            if limit < 0:
                raise ValueError(f"Budget for '{category}' cannot be negative")
        return v


class SwapInput(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    price: float = Field(..., ge=0)
    reason: str = ""

    def to_swap(self) -> SwapPending:
        return SwapPending(name=self.name.strip(), price=self.price, reason=self.reason)


class CartItemInput(BaseModel):
    """Schema for adding an item to a cart."""
    name: str = Field(..., min_length=1, max_length=200)
    price: float = Field(..., ge=0)
    category: str = Field(..., min_length=1, max_length=100)
    ingredients: List[str] = Field(default_factory=list)
    added_by: str = Field(..., min_length=1)
    suggested_swap: Optional[SwapInput] = None
    auto_swap: bool = True

    @field_validator('name', 'category')
    @classmethod
    def strip_whitespace(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('ingredients')
    @classmethod
    def validate_ingredients(cls, v):
        """Accept comma separated entries inside each string, drop empties."""
        parts = []
        for entry in v:
            parts.extend(entry.split(','))
        return _strip_list(parts)

    @model_validator(mode='after')
    def check_swap_price(self):
        if self.suggested_swap is not None and self.suggested_swap.price > self.price:
            raise ValueError('Swap price cannot be above the item price')
        return self


class AllergyCheckInput(BaseModel):
    ingredients: List[str] = Field(default_factory=list)
