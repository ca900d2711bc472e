from __future__ import annotations


class FixServiceError(RuntimeError):
    """Raised when the inference endpoint cannot produce a usable fix."""
