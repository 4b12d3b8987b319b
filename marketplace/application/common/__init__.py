"""Shared application building blocks (CQRS base classes, lookups)."""
