"""Smart swap suggestions: store-brand alternative for expensive items."""
from typing import Optional

from groupkart.domain.CartItem import SwapPending
from groupkart.utilities.config import SWAP_PRICE_THRESHOLD, SWAP_PRICE_FACTOR
from groupkart.utilities.constants import STORE_BRAND_SUFFIX, SWAP_REASON
from groupkart.utilities.rounding import round_half_up


def suggest_swap(name: str, price: float, *, threshold: Optional[float] = None,
                 factor: Optional[float] = None) -> Optional[SwapPending]:
    """Return a SwapPending for items priced strictly above the threshold, else None.

    The swap price is rounded half-up to a whole amount.
    """
    limit = SWAP_PRICE_THRESHOLD if threshold is None else threshold
    ratio = SWAP_PRICE_FACTOR if factor is None else factor
    if price <= limit:
        return None
    return SwapPending(
        name=f"{name}{STORE_BRAND_SUFFIX}",
        price=round_half_up(price * ratio),
        reason=SWAP_REASON,
    )

__all__ = ['suggest_swap']
