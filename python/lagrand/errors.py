from __future__ import annotations


class EntropyError(RuntimeError):
    """Raised when the entropy reader fails or returns fewer bytes than asked."""


class DomainError(ValueError):
    """Raised for out-of-domain arguments such as a non-positive bound."""
