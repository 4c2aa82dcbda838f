"""Shared helpers: application paths and logging setup."""
