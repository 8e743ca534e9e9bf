"""Interface for correlation token generators."""

import abc

# pylint: disable=too-few-public-methods


class TokenGenerator(abc.ABC):
    """Contract for a correlation token generator.

    Implementations must return a non-empty string that is unique among the
    tokens outstanding at the same time within one process. The empty string
    is reserved for fire-and-forget calls and is never a valid token.
    """

    @abc.abstractmethod
    def new_token(self) -> str:
        """Generate a new unique correlation token."""
