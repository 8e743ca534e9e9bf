"""Entry points for CALLWIRE (command-line interface)."""
