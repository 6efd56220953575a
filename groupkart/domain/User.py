"""User domain entity: locally generated id, display name, allergies."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple
from uuid import uuid4


def new_id() -> str:
    """Opaque local identifier (13 hex chars), shared by users, carts and items."""
    return uuid4().hex[:13]


def clean_tags(values: Optional[Iterable[str]]) -> Tuple[str, ...]:
    # Ordered, duplicate-free, blank entries dropped
    seen = []
    for v in values or ():
        s = str(v).strip()
        if s and s not in seen:
            seen.append(s)
    return tuple(seen)


@dataclass(frozen=True)
class User:
    id: str
    name: str
    allergies: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "allergies", clean_tags(self.allergies))

    @staticmethod
    def create(name: str, allergies: Optional[Iterable[str]] = None) -> "User":
        '''Creates a user with a freshly generated id.'''
        return User(id=new_id(), name=name.strip(), allergies=tuple(allergies or ()))

    def is_allergic_to_any(self, ingredients: Iterable[str]) -> bool:
        '''
        True when one of the allergies appears inside one of the ingredient names.
        Matching is case-insensitive and checks ingredient-contains-allergy only.
        '''
        lowered = [i.lower() for i in ingredients]
        return any(a.lower() in ing for a in self.allergies for ing in lowered)

    def __str__(self) -> str:
        if self.allergies:
            return f"{self.name} ({self.id}) - Allergies: {', '.join(self.allergies)}"
        return f"{self.name} ({self.id})"

    @staticmethod
    def from_dict(data):
        '''Creates a User from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        return User(
            id=str(d.get("id", "")),
            name=str(d.get("name", "")),
            allergies=tuple(d.get("allergies") or ()),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "allergies": list(self.allergies),
        }
