"""Unit tests.

Purpose
- Verify a single module/class/function in isolation.

Guidelines
- No real I/O; use fakes at boundaries (fake send functions, spy registries).
- Prefer behavior-centric assertions over implementation details.
- Keep tests small, fast, and deterministic.
"""
