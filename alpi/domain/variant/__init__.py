"""
Variant domain module
"""
from .models import Variant, VARIANT_CHOICES
from .resolver import VariantResolver, parse_variant

__all__ = [
    "Variant",
    "VARIANT_CHOICES",
    "VariantResolver",
    "parse_variant",
]
