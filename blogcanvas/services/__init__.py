"""Deterministic scoring services."""
