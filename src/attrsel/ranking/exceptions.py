"""Custom exceptions for attribute ranking.

Provides a hierarchy of exceptions for handling evaluator errors
with contextual information for debugging.
"""

from __future__ import annotations

from typing import Any


class RankingError(Exception):
    """Base exception for attribute ranking errors.

    All ranking-specific exceptions inherit from this class,
    allowing callers to catch all ranking errors with a single except.

    Attributes:
        message: Human-readable error message.
        context: Additional context dictionary.
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize ranking error.

        Args:
            message: Human-readable error message.
            context: Additional context for debugging.
        """
        self.message = message
        self.context = context or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context."""
        if not self.context:
            return self.message
        context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.message} ({context_str})"


class CapabilityError(RankingError):
    """Raised when a dataset does not match what an evaluator can handle.

    This occurs when:
    - No class attribute has been assigned
    - The class attribute is not nominal
    - Numeric attributes remain and no discretization was requested

    Always raised before any counts are accumulated.

    Attributes:
        capability: Name of the missing capability.
    """

    def __init__(
        self,
        message: str,
        capability: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize capability error.

        Args:
            message: Human-readable error message.
            capability: Name of the missing capability.
            context: Additional context for debugging.
        """
        self.capability = capability
        full_context: dict[str, Any] = {"capability": capability}
        if context:
            full_context.update(context)
        super().__init__(message, full_context)


class DegenerateInputError(RankingError):
    """Raised when a score vector cannot be normalized.

    Only raised under strict normalization; the default policy maps
    an all-zero vector to an all-zero normalized vector.

    Attributes:
        statistic: Name of the vector that could not be normalized.
    """

    def __init__(
        self,
        message: str,
        statistic: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize degenerate input error.

        Args:
            message: Human-readable error message.
            statistic: Name of the offending vector.
            context: Additional context for debugging.
        """
        self.statistic = statistic
        full_context: dict[str, Any] = {}
        if statistic is not None:
            full_context["statistic"] = statistic
        if context:
            full_context.update(context)
        super().__init__(message, full_context)


class InternalConsistencyError(RankingError):
    """Raised when score vectors disagree in length.

    This signals a logic defect rather than bad data, so the build
    is aborted instead of returning partial results.

    Attributes:
        lengths: Mapping of vector name to its length.
    """

    def __init__(
        self,
        message: str,
        lengths: dict[str, int],
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize internal consistency error.

        Args:
            message: Human-readable error message.
            lengths: Mapping of vector name to its length.
            context: Additional context for debugging.
        """
        self.lengths = dict(lengths)
        full_context: dict[str, Any] = dict(lengths)
        if context:
            full_context.update(context)
        super().__init__(message, full_context)


class NotBuiltError(RankingError):
    """Raised when an evaluator is queried before a successful build."""


class AttributeIndexError(RankingError, IndexError):
    """Raised when an attribute index cannot be scored.

    This occurs when:
    - The index is the class index
    - The index is negative or beyond the last attribute

    Attributes:
        index: Requested attribute index.
        num_attributes: Number of attributes in the built dataset.
    """

    def __init__(
        self,
        message: str,
        index: int,
        num_attributes: int,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize attribute index error.

        Args:
            message: Human-readable error message.
            index: Requested attribute index.
            num_attributes: Number of attributes in the built dataset.
            context: Additional context for debugging.
        """
        self.index = index
        self.num_attributes = num_attributes
        full_context: dict[str, Any] = {"index": index, "num_attributes": num_attributes}
        if context:
            full_context.update(context)
        super().__init__(message, full_context)


class ConfigurationError(RankingError):
    """Raised when configuration parameters are invalid.

    This occurs when:
    - An unknown Va formula name is given
    - An unknown evaluator name is requested

    Attributes:
        parameter: Parameter name that is invalid.
        value: Invalid value provided.
        valid_range: Description of valid values.
    """

    def __init__(
        self,
        message: str,
        parameter: str,
        value: Any,
        valid_range: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Human-readable error message.
            parameter: Parameter name that is invalid.
            value: Invalid value provided.
            valid_range: Description of valid values.
            context: Additional context for debugging.
        """
        self.parameter = parameter
        self.value = value
        self.valid_range = valid_range
        full_context: dict[str, Any] = {"parameter": parameter, "value": value}
        if valid_range is not None:
            full_context["valid_range"] = valid_range
        if context:
            full_context.update(context)
        super().__init__(message, full_context)
