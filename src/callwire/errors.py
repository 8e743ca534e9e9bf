"""Error definitions for CALLWIRE.

The four dispatch errors let a transport branch on why a call failed:

- `EnvelopeDecodeError` — the raw value is not a ``(name, token, payload)`` triple.
- `UnknownFunctionError` — no registry entry for ``name``.
- `InputDecodeError` — the payload does not match the declaration's input shape.
- `HandlerExecutionError` — the handler itself raised.

None of them is retried; they all propagate to whoever invoked the dispatcher.
"""


class CallwireError(Exception):
    """Base class for all CALLWIRE errors."""


# ============================================================================
#                               Dispatch errors
# ============================================================================


class DispatchError(CallwireError):
    """Base class for errors raised while dispatching a single envelope."""


class EnvelopeDecodeError(DispatchError):
    """Raised when a raw envelope is not a ``(str, str, any)`` triple."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Malformed envelope: {detail}")
        self.detail = detail


class UnknownFunctionError(DispatchError, LookupError):
    """Raised when an envelope names a call with no registry entry."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No handler registered for {name!r}")
        self.name = name


class InputDecodeError(DispatchError):
    """Raised when a payload fails the declaration's input shape."""

    def __init__(self, name: str, detail: str) -> None:
        super().__init__(f"Invalid input for {name!r}: {detail}")
        self.name = name
        self.detail = detail


class HandlerExecutionError(DispatchError):
    """Raised when a handler fails; the original exception is kept as ``cause``."""

    def __init__(self, name: str, cause: BaseException) -> None:
        super().__init__(
            f"Handler for {name!r} failed: {type(cause).__name__}: {cause}"
        )
        self.name = name
        self.cause = cause


# ============================================================================
#                       Declaration and registry errors
# ============================================================================


class InvalidDeclarationError(CallwireError, ValueError):
    """Raised when a call declaration is malformed (e.g. empty name)."""


class RegistryError(CallwireError):
    """Base class for registry construction errors."""


class DuplicateDeclarationError(RegistryError):
    """Raised when a name is registered twice under the ``error`` policy."""

    def __init__(self, name: str) -> None:
        super().__init__(f"A handler is already registered for {name!r}")
        self.name = name


class RegistrySealedError(RegistryError):
    """Raised when registering into a builder that has already been sealed."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Cannot register {name!r}: registry is sealed")
        self.name = name


# ============================================================================
#                           Pending call errors
# ============================================================================


class PendingCallError(CallwireError):
    """Base class for caller-side correlation errors."""


class UnknownTokenError(PendingCallError, LookupError):
    """Raised when a response arrives for a token nobody is waiting on."""

    def __init__(self, token: str) -> None:
        super().__init__(f"No pending call for token {token!r}")
        self.token = token


class DuplicateTokenError(PendingCallError):
    """Raised when opening a pending call for a token that is already in flight."""

    def __init__(self, token: str) -> None:
        super().__init__(f"A call is already pending for token {token!r}")
        self.token = token


# ============================================================================
#                               Configuration
# ============================================================================


class ConfigError(CallwireError):
    """Raised when an environment setting holds an unsupported value."""

    def __init__(self, variable: str, value: str, allowed: tuple[str, ...]) -> None:
        super().__init__(
            f"{variable}={value!r} is not supported; expected one of {', '.join(allowed)}"
        )
        self.variable = variable
        self.value = value
        self.allowed = allowed
