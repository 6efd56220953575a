from fastapi import (
    FastAPI,
    APIRouter,
    Depends,
    HTTPException,
    Query,
)

from typing import Optional
import logging

from groupkart.domain.Cart import Cart
from groupkart.domain.User import User
from groupkart.events.Event_Bus import EventBus, log_listener, CART_ALLERGY_ALERT, CART_BUDGET_ALERT
from groupkart.events.event_helpers import publish_allergy_alert, publish_budget_alert, describe_allergy_alert
from groupkart.infra.Snapshot_Repository import SnapshotRepository, build_store
from groupkart.logic.budget.tracker import budget_alert, budget_overview
from groupkart.logic.reporting.listing import aggregate_savings, carts_for_user, list_cart_cards
from groupkart.logic.reporting.summary import build_cart_summary
from groupkart.logic.store.cart_store import CartStore
from groupkart.logic.swaps.suggester import suggest_swap
from groupkart.utilities.constants import COMMON_ALLERGIES, PRODUCT_CATEGORIES
from groupkart.utilities.rounding import round_half_up
from groupkart.utilities.validators import (
    AllergyCheckInput,
    CartCreateInput,
    CartItemInput,
    CurrentUserInput,
    NewUserInput,
    UserInput,
)

# Logging
logger = logging.getLogger("groupkart_app")

# Initialize FastAPI app
app = FastAPI(title="GroupKart Cart API")
router = APIRouter(prefix="/api")

# -------------------- Store provider (composition root) --------------------
_store: Optional[CartStore] = None


def create_default_store() -> CartStore:
    """Store backed by the configured snapshot file, alerts logged."""
    bus = EventBus()
    bus.subscribe(CART_ALLERGY_ALERT, log_listener)
    bus.subscribe(CART_BUDGET_ALERT, log_listener)
    repository = SnapshotRepository()
    store = build_store(repository, bus)
    logger.info("Cart store loaded from %s (%d carts)", repository.path, len(store.carts))
    return store


def get_store() -> CartStore:
    """FastAPI dependency; tests override it with a fresh in-memory store."""
    global _store
    if _store is None:
        _store = create_default_store()
    return _store


def _require_cart(store: CartStore, cart_id: str) -> Cart:
    cart = store.get_cart(cart_id)
    if cart is None:
        raise HTTPException(status_code=404, detail="Cart not found")
    return cart


def _user_json(user: Optional[User]):
    return user.to_dict() if user else None


# -------------------- Users --------------------
@router.post("/users")
def create_user(payload: NewUserInput, store: CartStore = Depends(get_store)):
    user = User.create(payload.name, payload.allergies)
    if payload.make_current:
        store.set_current_user(user)
    return {"user": user.to_dict(), "current": payload.make_current}


@router.get("/current-user")
def read_current_user(store: CartStore = Depends(get_store)):
    return {"user": _user_json(store.current_user)}


@router.put("/current-user")
def update_current_user(payload: CurrentUserInput, store: CartStore = Depends(get_store)):
    store.set_current_user(payload.user.to_user() if payload.user else None)
    return {"user": _user_json(store.current_user)}


# -------------------- Carts --------------------
@router.post("/carts")
def create_cart(payload: CartCreateInput, store: CartStore = Depends(get_store)):
    users = [u.to_user() for u in payload.users]
    cart_id = store.create_cart(payload.name, users, payload.category_budgets)
    return {"id": cart_id, "cart": store.get_cart(cart_id).to_dict()}


@router.get("/carts")
def list_carts(user_id: Optional[str] = Query(default=None), store: CartStore = Depends(get_store)):
    state = store.state
    carts = carts_for_user(state, user_id) if user_id else list(state.carts.values())
    return {
        "carts": list_cart_cards(state, user_id),
        "count": len(carts),
        "total_savings": aggregate_savings(carts),
    }


@router.get("/carts/{cart_id}")
def read_cart(cart_id: str, store: CartStore = Depends(get_store)):
    return _require_cart(store, cart_id).to_dict()


@router.post("/carts/{cart_id}/users")
def add_user(cart_id: str, payload: UserInput, store: CartStore = Depends(get_store)):
    _require_cart(store, cart_id)
    added = store.add_user_to_cart(cart_id, payload.to_user())
    return {"added": added, "users": [u.to_dict() for u in store.get_cart(cart_id).users]}


# -------------------- Items --------------------
@router.post("/carts/{cart_id}/items")
def add_item(cart_id: str, payload: CartItemInput, store: CartStore = Depends(get_store)):
    """Add an item; allergy and budget checks run first and come back as warnings."""
    _require_cart(store, cart_id)
    conflicts = store.check_allergy_conflicts(cart_id, payload.ingredients)
    over_by = budget_alert(store, cart_id, payload.category, payload.price)

    if payload.suggested_swap is not None:
        swap = payload.suggested_swap.to_swap()
    elif payload.auto_swap:
        swap = suggest_swap(payload.name, payload.price)
    else:
        swap = None

    item_id = store.add_item_to_cart(cart_id, {
        "name": payload.name,
        "price": payload.price,
        "category": payload.category,
        "ingredients": payload.ingredients,
        "added_by": payload.added_by,
        "suggested_swap": swap,
    })

    warnings = []
    if conflicts:
        publish_allergy_alert(store.event_bus, cart_id, payload.name, conflicts)
        warnings.append({
            "type": "allergy",
            "users": [u.to_dict() for u in conflicts],
            "message": describe_allergy_alert(conflicts),
        })
    if over_by is not None:
        publish_budget_alert(store.event_bus, cart_id, payload.category, over_by)
        warnings.append({
            "type": "budget",
            "category": payload.category,
            "over_by": over_by,
            "message": f"This item exceeds your {payload.category} budget by {round_half_up(over_by)}",
        })
    item = store.get_cart(cart_id).find_item(item_id)
    return {"item": item.to_dict(), "warnings": warnings}


@router.delete("/carts/{cart_id}/items/{item_id}")
def remove_item(cart_id: str, item_id: str, store: CartStore = Depends(get_store)):
    _require_cart(store, cart_id)
    removed = store.remove_item_from_cart(cart_id, item_id)
    return {"removed": removed, "count": len(store.get_cart(cart_id).items)}


@router.post("/carts/{cart_id}/items/{item_id}/accept-swap")
def accept_swap(cart_id: str, item_id: str, store: CartStore = Depends(get_store)):
    _require_cart(store, cart_id)
    accepted = store.accept_swap(cart_id, item_id)
    cart = store.get_cart(cart_id)
    item = cart.find_item(item_id)
    return {
        "accepted": accepted,
        "item": item.to_dict() if item else None,
        "total_savings": cart.total_savings,
        "smart_swaps_accepted": cart.smart_swaps_accepted,
    }


# -------------------- Queries --------------------
@router.get("/carts/{cart_id}/category-spent")
def category_spent(cart_id: str, category: str = Query(...), store: CartStore = Depends(get_store)):
    cart = _require_cart(store, cart_id)
    return {
        "category": category,
        "spent": store.get_category_spent(cart_id, category),
        "budget": cart.budget_for(category),
    }


@router.get("/carts/{cart_id}/contribution/{user_id}")
def user_contribution(cart_id: str, user_id: str, store: CartStore = Depends(get_store)):
    _require_cart(store, cart_id)
    return {"user_id": user_id, "contribution": store.get_user_contribution(cart_id, user_id)}


@router.get("/carts/{cart_id}/savings")
def total_savings(cart_id: str, store: CartStore = Depends(get_store)):
    cart = _require_cart(store, cart_id)
    return {
        "total_savings": store.get_total_savings(cart_id),
        "smart_swaps_accepted": cart.smart_swaps_accepted,
    }


@router.post("/carts/{cart_id}/allergy-check")
def allergy_check(cart_id: str, payload: AllergyCheckInput, store: CartStore = Depends(get_store)):
    _require_cart(store, cart_id)
    users = store.check_allergy_conflicts(cart_id, payload.ingredients)
    return {"conflicts": [u.to_dict() for u in users], "count": len(users)}


@router.get("/carts/{cart_id}/budgets")
def budgets(cart_id: str, store: CartStore = Depends(get_store)):
    _require_cart(store, cart_id)
    return {"budgets": budget_overview(store, cart_id)}


@router.get("/carts/{cart_id}/summary")
def summary(cart_id: str, store: CartStore = Depends(get_store)):
    _require_cart(store, cart_id)
    return build_cart_summary(store, cart_id)


@router.get("/meta")
def meta():
    return {"allergies": list(COMMON_ALLERGIES), "categories": list(PRODUCT_CATEGORIES)}


app.include_router(router)
