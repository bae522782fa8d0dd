from __future__ import annotations


class EncodeError(ValueError):
    """Raised when an entity cannot be encoded into a node."""
    pass


class UnsupportedEntityError(EncodeError):
    """Raised when no encoder is registered for an entity type."""
    pass
