"""Shared helper functions (path remapping)."""
