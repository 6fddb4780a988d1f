"""Standardized exception hierarchy for vector stores."""

from __future__ import annotations

from typing import Any, Optional


class VectorStoreError(Exception):
    """Base exception for vector store failures raised by vecstore itself."""

    def __init__(
        self,
        message: str,
        *,
        backend: Optional[str] = None,
        recoverable: bool = True,
        context: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.backend = backend
        self.recoverable = recoverable
        self.context = context or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        parts = [self.message]
        if self.backend:
            parts.append(f"[backend={self.backend}]")
        if self.context:
            parts.append(f"context={self.context}")
        return " ".join(parts)


class ConfigurationError(VectorStoreError):
    """Configuration or setup issues (non-recoverable by default)."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("recoverable", False)
        super().__init__(message, **kwargs)


class ValidationError(VectorStoreError):
    """Invalid collection names, identifiers or record definitions."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("recoverable", False)
        super().__init__(message, **kwargs)
