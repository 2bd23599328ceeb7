"""Recurring transaction engine: detection, scheduling and cash-flow projections."""
