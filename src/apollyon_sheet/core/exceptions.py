"""Custom exception hierarchy for the Apollyon character sheet.

All exceptions inherit from ApollyonSheetError, enabling unified error
handling at the presentation boundary while preserving domain-specific
context in ``details``.

Refusals that are part of normal editing (deleting the last row of a
collection, picking an option the selection validator disabled) are not
errors; the editor reports them with a ``False`` return value instead.

Example:
    >>> from apollyon_sheet.core.exceptions import SheetImportError
    >>> raise SheetImportError("Payload is not valid JSON", reason="json")
"""

from __future__ import annotations

from typing import Any


class ApollyonSheetError(Exception):
    """Base exception for all character sheet errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception.

        Returns:
            String representation suitable for debugging.
        """
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(ApollyonSheetError):
    """Raised when application configuration is invalid.

    This includes invalid values or incompatible configuration combinations,
    such as a multiplier range whose minimum exceeds its maximum.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


# =============================================================================
# Catalog Exceptions
# =============================================================================


class CatalogError(ApollyonSheetError):
    """Raised when the ability catalog source cannot be loaded.

    This typically occurs when the catalog file is missing, is not valid
    JSON, or contains records without the expected fields.
    """

    def __init__(
        self,
        message: str,
        *,
        source_file: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize catalog error with source file context.

        Args:
            message: Human-readable error description.
            source_file: Path to the catalog file that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if source_file:
            combined_details["source_file"] = source_file
        super().__init__(message, details=combined_details)


# =============================================================================
# Sheet Exceptions
# =============================================================================


class SheetImportError(ApollyonSheetError):
    """Raised when an exported payload cannot be imported.

    The in-memory sheet is never modified when this is raised; callers
    surface the message to the user and keep editing the current sheet.
    """

    def __init__(
        self,
        message: str,
        *,
        reason: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize import error with the failure reason.

        Args:
            message: Human-readable error description.
            reason: Short machine-readable failure category (``json``, ``structure``).
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if reason:
            combined_details["reason"] = reason
        super().__init__(message, details=combined_details)


class SheetStateError(ApollyonSheetError):
    """Raised when the editor API is used with an invalid target.

    Examples are an out-of-range slot or row index, or an attribute field
    name that does not exist.
    """


class SelectionError(SheetStateError):
    """Raised when an ability is not offered by the slot's current category."""

    def __init__(
        self,
        message: str,
        *,
        category: str | None = None,
        ability: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize selection error with category and ability context.

        Args:
            message: Human-readable error description.
            category: Category currently selected in the slot.
            ability: The ability name that was rejected.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if category is not None:
            combined_details["category"] = category
        if ability is not None:
            combined_details["ability"] = ability
        super().__init__(message, details=combined_details)


# =============================================================================
# UI Exceptions
# =============================================================================


class UIError(ApollyonSheetError):
    """Raised when the Streamlit presentation layer fails.

    This typically occurs when session state holds an unexpected object.
    """


__all__ = [
    "ApollyonSheetError",
    "ConfigurationError",
    "CatalogError",
    "SheetImportError",
    "SheetStateError",
    "SelectionError",
    "UIError",
]
