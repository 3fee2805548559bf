"""
Custom exception classes for camo.

Provides structured error handling with domain-specific exceptions
for the derive, export and backend layers.
"""

from enum import Enum
from typing import Any, Callable, Dict, Optional


class CamoException(Exception):
    """Base exception class for all camo exceptions."""

    pass


class DeriveError(CamoException):
    """Raised when a Python declaration cannot be turned into a syntax tree."""

    pass


class UnsupportedTypeError(DeriveError):
    """
    Raised when an annotation or payload has no counterpart in the type model.

    Example:
        >>> raise UnsupportedTypeError(
        ...     reason="Optional fields are not supported",
        ...     details={"field": "name", "annotation": "Optional[str]"}
        ... )
    """

    def __init__(self, reason: str, details: dict = None):
        self.reason = reason
        self.details = details or {}
        message = f"{reason}"
        if self.details:
            message += f" - {self.details}"
        super().__init__(message)


class ExportError(CamoException):
    """Raised when declarations cannot be collected, rendered or written."""

    pass


class BackendRegistryError(CamoException, LookupError):
    """Raised for unknown or conflicting backend registrations."""

    pass


class DuplicatePolicy(str, Enum):
    """Policy for two exported declarations that end up with the same name."""

    FAIL = "fail"              # Raise ExportError (default)
    WARN = "warn"              # Log warning and keep both
    SKIP = "skip"              # Keep the first, drop the later one


class DuplicateNameHandler:
    """
    Handles duplicate declaration names based on configured policy.

    Usage:
        >>> handler = DuplicateNameHandler(policy=DuplicatePolicy.FAIL)
        >>> handler.handle("Foo", details={"modules": ["a", "b"]})
        # Raises ExportError

        >>> handler = DuplicateNameHandler(policy=DuplicatePolicy.SKIP)
        >>> handler.handle("Foo")
        False
    """

    def __init__(
        self,
        policy: DuplicatePolicy = DuplicatePolicy.FAIL,
        logger: Optional[Any] = None,
        custom_handler: Optional[Callable[[str, Dict], bool]] = None,
    ):
        """
        Initialize the handler.

        Args:
            policy: How to handle duplicates (FAIL, WARN, SKIP)
            logger: Logger instance for WARN policy
            custom_handler: Custom function deciding whether to keep the duplicate
        """
        self.policy = DuplicatePolicy(policy)
        self.logger = logger
        self.custom_handler = custom_handler

    def handle(self, name: str, details: Optional[Dict[str, Any]] = None) -> bool:
        """
        Handle a duplicate name based on policy.

        Returns:
            True if the duplicate declaration should be kept, False to drop it

        Raises:
            ExportError: If policy is FAIL
        """
        details = details or {}

        if self.custom_handler:
            return self.custom_handler(name, details)

        if self.policy == DuplicatePolicy.FAIL:
            message = f"Duplicate exported name {name!r}"
            if details:
                message += f" - {details}"
            raise ExportError(message)

        if self.policy == DuplicatePolicy.WARN:
            if self.logger:
                self.logger.warning(f"Duplicate exported name {name!r}: {details}")
            else:
                import warnings
                warnings.warn(f"Duplicate exported name {name!r} - {details}", UserWarning)
            return True

        return False
