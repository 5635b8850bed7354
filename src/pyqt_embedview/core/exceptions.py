"""Exception hierarchy for embedded-view synchronization.

Every component raises these directly; none of them are swallowed by the
synchronizer or the cascade. The first failure halts the operation.
"""

from typing import Any, Optional


class EmbedViewError(Exception):
    """Base class for all embedded-view errors."""


class TemplateNotFound(EmbedViewError):
    """Raised when a kind does not resolve against the manifest."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"No template registered for kind {kind!r}")


class HostMutationFailure(EmbedViewError):
    """Raised when a host-tree operation (create, copy, delete, load) fails.

    The host's own error text is kept in ``host_message`` and the original
    exception is chained as ``__cause__``.
    """

    def __init__(self, operation: str, host_message: str):
        self.operation = operation
        self.host_message = host_message
        super().__init__(f"Host operation {operation!r} failed: {host_message}")


class CascadeAborted(EmbedViewError):
    """Raised when a cascade step fails.

    ``mutated`` holds whatever containers were already updated before the
    failure. It is informational only and not guaranteed complete.
    """

    def __init__(self, kind: str, origin: BaseException, mutated: Optional[Any] = None):
        self.kind = kind
        self.origin = origin
        self.mutated = mutated
        super().__init__(f"Cascade for {kind!r} aborted: {origin}")


class ManifestError(EmbedViewError):
    """Raised when a manifest file cannot be read or is malformed."""
