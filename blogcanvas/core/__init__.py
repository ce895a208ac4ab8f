"""Logging, exceptions and other cross-cutting helpers."""
