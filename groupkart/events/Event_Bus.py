"""Simple Event Bus / Observer implementation for cart events.

Event names:
  cart.state_changed -> payload CartState (new snapshot after a command changed state)
  cart.allergy_alert -> payload {"cart_id": str, "item_name": str, "users": [User]}
  cart.budget_alert  -> payload {"cart_id": str, "category": str, "over_by": float}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
CART_STATE_CHANGED = "cart.state_changed"
CART_ALLERGY_ALERT = "cart.allergy_alert"
CART_BUDGET_ALERT = "cart.budget_alert"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def subscribers(self, event_name: str) -> List[Callable[[str, Any], None]]:
		return list(self._subscribers.get(event_name, []))

	def publish(self, event_name: str, payload: Any):
		for cb in self.subscribers(event_name):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %r", event_name, cb)


def log_listener(event_name: str, payload: Any):
	"""Listener that writes alerts to the application log."""
	logger.info("[EVENT] %s: %s", event_name, payload)


__all__ = [
	'EventBus', 'log_listener',
	'CART_STATE_CHANGED', 'CART_ALLERGY_ALERT', 'CART_BUDGET_ALERT'
]
