"""GroupKart: shared shopping carts with category budgets, allergy warnings and smart swaps."""
__version__ = "0.1.0"
