"""Adapters for CALLWIRE interfaces.

Concrete structural validators (pydantic-backed shapes), token generators,
and an in-process loopback transport.
"""
