"""taskboard - boards, lists and cards with rule-based recommendations."""

__version__ = "0.1.0"
