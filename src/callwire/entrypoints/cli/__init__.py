"""The ``callwire`` command-line interface."""
