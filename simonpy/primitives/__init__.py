"""Whole-cipher reference implementation of Simon."""
