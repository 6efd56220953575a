from typing import Final, Tuple

COMMON_ALLERGIES: Final[Tuple[str, ...]] = (
    'Peanuts',
    'Tree Nuts',
    'Milk/Dairy',
    'Eggs',
    'Soy',
    'Wheat/Gluten',
    'Fish',
    'Shellfish',
    'Sesame',
)
PRODUCT_CATEGORIES: Final[Tuple[str, ...]] = (
    'Snacks',
    'Beverages',
    'Dairy',
    'Meat & Seafood',
    'Fruits & Vegetables',
    'Bakery',
    'Frozen Foods',
    'Household',
    'Personal Care',
)
SWAP_REASON: Final[str] = "Save money with store brand alternative"
STORE_BRAND_SUFFIX: Final[str] = " (Store Brand)"
SNAPSHOT_VERSION: Final[int] = 0

# Smart saver score weights (0-100 scale)
SCORE_POINTS_PER_SWAP: Final[int] = 20
SCORE_POINTS_PER_SAVED_PERCENT: Final[int] = 2
SCORE_POINTS_FOR_ITEMS: Final[int] = 20
SCORE_BADGES: Final[Tuple[Tuple[int, str], ...]] = (
    (90, "Smart Saver Champion"),
    (80, "Smart Saver Pro"),
    (60, "Smart Saver"),
    (40, "Budget Conscious"),
    (0, "Getting Started"),
)
