"""Shared value sets and defaults."""
