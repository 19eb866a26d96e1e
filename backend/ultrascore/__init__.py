"""
UltraScore: deterministic 0-100 health scoring for foods, beverages and personal care products.
"""
__version__ = "0.1.0"
