from __future__ import annotations

from typing import Any, Dict, Mapping


class LoadchainError(Exception):
    """Base exception for Loadchain."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class LoaderResolutionError(LoadchainError, LookupError):
    """Raised when a loader request cannot be resolved against the build context."""

    def __init__(
        self,
        message: str = "",
        *,
        loader: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if loader is not None:
            ctx.setdefault("loader", loader)
        LoadchainError.__init__(self, message, context=ctx)
        LookupError.__init__(self, message)
        self.loader = loader


class LoaderOptionsError(LoadchainError, TypeError):
    """Raised when loader options are neither absent, text, structured nor primitive."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        LoadchainError.__init__(self, message, context=context)
        TypeError.__init__(self, message)


class BuiltinLoaderError(LoadchainError, AssertionError):
    """Raised when a builtin step is materialized from a non-builtin loader.

    This is an internal invariant violation, not a user configuration error.
    """

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        LoadchainError.__init__(self, message, context=context)
        AssertionError.__init__(self, message)


class RuleUseValidationError(LoadchainError, ValueError):
    """Raised when a ``use`` declaration does not match the rule-use schema."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        LoadchainError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ConfigError(LoadchainError, ValueError):
    """Raised when Loadchain configuration is malformed or fails validation."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        LoadchainError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


__all__ = [
    "LoadchainError",
    "LoaderResolutionError",
    "LoaderOptionsError",
    "BuiltinLoaderError",
    "RuleUseValidationError",
    "ConfigError",
]
