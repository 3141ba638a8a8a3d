"""
Custom exception hierarchy for road generation.

Exceptions are raised only for malformed inputs (grids, structures,
configuration). Search failures are never raised: an unreachable target
yields an empty segment and the road is truncated instead.
"""

from typing import Any, Dict, List, Optional


class RoadGenException(Exception):
    """
    Base exception for all roadgen errors.

    Attributes:
        error_code: String identifier for the error type
        message: User-friendly error message
        details: Technical details for logging/debugging
        suggestions: Optional list of resolution suggestions
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize RoadGenException.

        Args:
            message: User-friendly error message
            error_code: String identifier for the error type
            details: Technical details for logging
            suggestions: List of suggestions for resolution
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.suggestions = suggestions or []

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary.

        Returns:
            Dictionary representation of the error
        """
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "suggestions": self.suggestions,
        }

    def __str__(self) -> str:
        """String representation of the exception."""
        return f"{self.error_code}: {self.message}"

    def __repr__(self) -> str:
        """Detailed string representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"error_code='{self.error_code}', "
            f"message='{self.message}')"
        )


class ValidationError(RoadGenException):
    """
    Raised when input validation fails.

    Used for malformed structures, coordinates, or road requests.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize ValidationError.

        Args:
            message: User-friendly error message
            field: Name of the field that failed validation
            details: Technical details about the validation failure
            suggestions: List of suggestions for fixing the validation error
        """
        error_details = details or {}
        if field:
            error_details["field"] = field

        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details=error_details,
            suggestions=suggestions or ["Check the input format and try again"],
        )


class TerrainGridError(RoadGenException):
    """
    Raised when a terrain grid cannot be used for road generation.

    Used for empty grids, mismatched passability/cost arrays, and
    negative movement costs.
    """

    def __init__(
        self,
        message: str,
        shape: Optional[tuple] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize TerrainGridError.

        Args:
            message: User-friendly error message
            shape: Offending array shape, if any
            details: Technical details about the grid problem
            suggestions: List of suggestions for resolution
        """
        error_details = details or {}
        if shape is not None:
            error_details["shape"] = list(shape)

        default_suggestions = [
            "Ensure passability and cost arrays are 2D with shape (height, width)",
            "Ensure movement costs are non-negative",
        ]

        super().__init__(
            message=message,
            error_code="TERRAIN_GRID_ERROR",
            details=error_details,
            suggestions=suggestions or default_suggestions,
        )


class ConfigurationError(RoadGenException):
    """
    Raised when road generation configuration is invalid.

    Used for invalid settings or inconsistent pathfinder parameters.
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        """
        Initialize ConfigurationError.

        Args:
            message: User-friendly error message
            config_key: Configuration key that is invalid
            details: Technical details about the configuration error
            suggestions: List of suggestions for resolution
        """
        error_details = details or {}
        if config_key:
            error_details["config_key"] = config_key

        default_suggestions = [
            "Check ROADGEN_* environment variables are set correctly",
            "Verify .env file syntax",
        ]

        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            details=error_details,
            suggestions=suggestions or default_suggestions,
        )
