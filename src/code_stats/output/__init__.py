"""
Output formatters for code_stats
"""

from .formatters import JsonOutputFormatter, TextOutputFormatter, contributor_to_dict

__all__ = [
    "JsonOutputFormatter",
    "TextOutputFormatter",
    "contributor_to_dict",
]
