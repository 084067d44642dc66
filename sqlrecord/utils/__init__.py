"""Utility helpers for sqlrecord."""
