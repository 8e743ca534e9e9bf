"""CALLWIRE

Transport-agnostic remote function calls: declare named calls with
input/output shapes, dispatch incoming envelopes against a sealed registry,
and correlate asynchronous responses to their callers through tokens.
"""

from .caller import RemoteCall, Sender, realize
from .declaration import Declaration, declare
from .dispatcher import Dispatcher
from .envelope import NO_RESPONSE, DispatchResult, Envelope, decode_envelope
from .errors import (
    CallwireError,
    DispatchError,
    EnvelopeDecodeError,
    HandlerExecutionError,
    InputDecodeError,
    UnknownFunctionError,
)
from .registry import Registry, RegistryBuilder, RegistryEntry, load_registry

__all__ = [
    "__version__",
    "CallwireError",
    "Declaration",
    "DispatchError",
    "DispatchResult",
    "Dispatcher",
    "Envelope",
    "EnvelopeDecodeError",
    "HandlerExecutionError",
    "InputDecodeError",
    "NO_RESPONSE",
    "Registry",
    "RegistryBuilder",
    "RegistryEntry",
    "RemoteCall",
    "Sender",
    "UnknownFunctionError",
    "decode_envelope",
    "declare",
    "load_registry",
    "realize",
]
__version__ = "0.1.0"
