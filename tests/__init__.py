"""CALLWIRE test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- integration/  : Components wired together (loopback transport, real generators).
- functional/   : User-visible flows tested at the CLI boundary.
- contract/     : Shared behavior/invariants enforced across multiple implementations.
- fixtures/     : Shared sample declarations and registries (no tests here).

Markers are applied per folder by `tests/conftest.py`; property-based tests
additionally carry @pytest.mark.property.
"""
