"""Adapters for data produced by external collaborators."""
