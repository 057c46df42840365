"""Holder normalization."""
from .normalizer import NormalizationResult, normalize, normalize_with_stats

__all__ = ["NormalizationResult", "normalize", "normalize_with_stats"]
