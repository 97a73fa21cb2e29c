"""Grocery list aggregation for the BitePath meal planner."""

__version__ = "0.1.0"
