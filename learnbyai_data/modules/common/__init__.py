"""Shared constants, errors, filters and base schemas."""
