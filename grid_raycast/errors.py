"""
Exceptions raised for ray/grid contract violations.
"""


class DegenerateDirectionError(ValueError):
    """Ray direction has no usable heading (both components zero, or non-finite)."""
