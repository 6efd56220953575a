"""Core business logic layer.

Subpackages:
- store: the cart state engine (CartStore commands and queries)
- swaps: smart swap suggestions
- budget: category budget tracking
- reporting: cart summaries and listings
"""
__all__ = ["store", "swaps", "budget", "reporting"]
