"""Snapshot repository: persists the whole CartState as one JSON document.

File layout (one file per storage key):
    {"state": {"carts": {...}, "currentUser": {...} | null}, "version": 0}
"""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Optional

from groupkart.domain.Cart import CartState
from groupkart.events.Event_Bus import EventBus, CART_STATE_CHANGED
from groupkart.infra.paths import SNAPSHOT_FILE
from groupkart.logic.store.cart_store import CartStore
from groupkart.utilities.constants import SNAPSHOT_VERSION

logger = logging.getLogger(__name__)


class SnapshotRepository:
    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path or SNAPSHOT_FILE)

    def load(self) -> CartState:
        """Read the persisted snapshot; an empty state when missing or unreadable."""
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                document = json.load(f)
        except FileNotFoundError:
            logger.info(f"No snapshot at {self.path}. Starting with an empty store.")
            return CartState()
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in snapshot file {self.path}: {e}")
            return CartState()
        if not isinstance(document, dict) or not isinstance(document.get("state"), dict):
            logger.error(f"Unexpected snapshot layout in {self.path}. Starting with an empty store.")
            return CartState()
        try:
            return CartState.from_dict(document["state"])
        except (TypeError, ValueError, AttributeError) as e:
            logger.error(f"Malformed snapshot content in {self.path}: {e}")
            return CartState()

    def save(self, state: CartState) -> None:
        """Write the snapshot atomically (temp file in the same directory, then move)."""
        document = {"state": state.to_dict(), "version": SNAPSHOT_VERSION}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(
            dir=str(self.path.parent), prefix=f".{self.path.stem}_", suffix=".json"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(document, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
        logger.debug(f"Snapshot written to {self.path} ({len(state.carts)} carts)")

    def on_state_changed(self, event_name: str, payload: Any):
        """Event bus subscriber: persist every new snapshot."""
        if isinstance(payload, CartState):
            self.save(payload)


def build_store(repository: SnapshotRepository, event_bus: Optional[EventBus] = None) -> CartStore:
    """Load the persisted snapshot and wire the repository so every command is followed by a write."""
    bus = event_bus if event_bus is not None else EventBus()
    store = CartStore(state=repository.load(), event_bus=bus)
    bus.subscribe(CART_STATE_CHANGED, repository.on_state_changed)
    return store

__all__ = ['SnapshotRepository', 'build_store']
