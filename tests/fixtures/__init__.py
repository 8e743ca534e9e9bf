"""Shared test fixtures (sample declarations and registries)."""
