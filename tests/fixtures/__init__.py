"""Shared test fixtures and builders for tatorscout tests."""

from .builders import (
    create_linear_trace,
    create_sparse_points,
    create_stationary_trace,
    small_grid,
)

__all__ = [
    "create_linear_trace",
    "create_sparse_points",
    "create_stationary_trace",
    "small_grid",
]
