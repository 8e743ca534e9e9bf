"""Interfaces (collaborator boundary) for CALLWIRE.

Defines framework-free contracts the core depends on but does not implement
itself: structural validators ("shapes") and token generators.

Dependency rule: this package is independent—do not import from any
`callwire.*` modules. It may be imported by the core modules,
`callwire.adapters`, and `callwire.entrypoints`.
"""
