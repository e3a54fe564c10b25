"""Exception taxonomy and error reporting for the OMDb client."""

import logging
import hashlib
from typing import Optional, Dict, Any, List
from datetime import datetime, timedelta
from enum import Enum
from dataclasses import dataclass, field

from .logging_config import get_logger


class ErrorCategory(Enum):
    """Error categories for classification."""
    VALIDATION = "validation"
    NETWORK = "network"
    HTTP_STATUS = "http_status"
    PARSING = "parsing"
    UPSTREAM = "upstream"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"


# Custom Exception Classes
class OmdbError(Exception):
    """Base exception for OMDb client errors."""
    category = ErrorCategory.UNKNOWN


class InvalidCategoryError(OmdbError, ValueError):
    """Raised when a search type is not movie, series or episode."""
    category = ErrorCategory.VALIDATION

    def __init__(self, search_type: str):
        super().__init__(f"Invalid search category- {search_type}")
        self.search_type = search_type


class TransportError(OmdbError):
    """Raised when the request could not be sent or no response arrived."""
    category = ErrorCategory.NETWORK


class UpstreamStatusError(OmdbError):
    """Raised when upstream answers with a status other than 200."""
    category = ErrorCategory.HTTP_STATUS

    def __init__(self, status_code: int):
        super().__init__(f"Status Code {status_code} received from IMDB")
        self.status_code = status_code


class DecodeError(OmdbError):
    """Raised when the response body is not the expected JSON shape."""
    category = ErrorCategory.PARSING


class ApplicationError(OmdbError):
    """
    Raised when upstream reports ``"Response": "False"``.

    The decoded structure is kept on ``result`` so callers can still read
    whatever fields were present.
    """
    category = ErrorCategory.UPSTREAM

    def __init__(self, message: str, result: Any = None):
        super().__init__(message)
        self.result = result


class ConfigurationError(OmdbError):
    """Exception raised for configuration-related errors."""
    category = ErrorCategory.CONFIGURATION


@dataclass
class ErrorInfo:
    """Information about an error occurrence."""
    error_id: str
    timestamp: datetime
    exception: Exception
    category: ErrorCategory
    context: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error info to dictionary."""
        return {
            'error_id': self.error_id,
            'timestamp': self.timestamp.isoformat(),
            'exception_type': type(self.exception).__name__,
            'exception_message': str(self.exception),
            'category': self.category.value,
            'context': self.context,
        }


class ErrorHandler:
    """
    Collects and logs client failures.

    The handler only records errors; it never retries or swallows them.
    Callers re-raise after reporting.
    """

    # Failures the caller caused or upstream answered are not errors of ours
    _LOG_LEVELS = {
        ErrorCategory.VALIDATION: logging.WARNING,
        ErrorCategory.UPSTREAM: logging.INFO,
        ErrorCategory.HTTP_STATUS: logging.WARNING,
        ErrorCategory.NETWORK: logging.ERROR,
        ErrorCategory.PARSING: logging.ERROR,
        ErrorCategory.CONFIGURATION: logging.ERROR,
    }

    def __init__(
        self,
        max_error_history: int = 1000,
        error_reporting_enabled: bool = True
    ):
        """
        Initialize error handler.

        Args:
            max_error_history: Maximum number of errors to keep in history
            error_reporting_enabled: Enable logging of handled errors
        """
        self.max_error_history = max_error_history
        self.error_reporting_enabled = error_reporting_enabled

        self.logger = get_logger(__name__)

        self.error_history: List[ErrorInfo] = []
        self.error_counts: Dict[str, int] = {}
        self.total_errors = 0

    def handle_error(
        self,
        exception: Exception,
        context: Optional[Dict[str, Any]] = None,
        category: Optional[ErrorCategory] = None
    ) -> ErrorInfo:
        """
        Record an error with classification.

        Args:
            exception: The exception that occurred
            context: Additional context information
            category: Error category (auto-detected if None)

        Returns:
            ErrorInfo object with error details
        """
        error_info = ErrorInfo(
            error_id=self._generate_error_id(exception),
            timestamp=datetime.now(),
            exception=exception,
            category=category or self._classify_error(exception),
            context=context or {}
        )

        self.total_errors += 1
        name = type(exception).__name__
        self.error_counts[name] = self.error_counts.get(name, 0) + 1

        if self.error_reporting_enabled:
            self._log_error(error_info)

        self._add_to_history(error_info)

        return error_info

    def _generate_error_id(self, exception: Exception) -> str:
        """Generate unique error ID."""
        error_string = f"{type(exception).__name__}:{exception}:{datetime.now().isoformat()}"
        return hashlib.md5(error_string.encode()).hexdigest()[:8]

    def _classify_error(self, exception: Exception) -> ErrorCategory:
        """Category carried by pyomdb errors; anything else is UNKNOWN."""
        if isinstance(exception, OmdbError):
            return exception.category
        return ErrorCategory.UNKNOWN

    def _log_error(self, error_info: ErrorInfo) -> None:
        """Log error information."""
        log_level = self._LOG_LEVELS.get(error_info.category, logging.ERROR)

        self.logger.log(
            log_level,
            f"Error {error_info.error_id}: {error_info.exception}",
            extra={
                'error_id': error_info.error_id,
                'category': error_info.category.value,
                'context': error_info.context,
                'exception_type': type(error_info.exception).__name__,
            }
        )

    def _add_to_history(self, error_info: ErrorInfo) -> None:
        """Add error to history with size limit."""
        self.error_history.append(error_info)

        if len(self.error_history) > self.max_error_history:
            self.error_history = self.error_history[-self.max_error_history:]

    def get_error_statistics(self) -> Dict[str, Any]:
        """Get error statistics."""
        by_category: Dict[str, int] = {}
        for error in self.error_history:
            by_category[error.category.value] = by_category.get(error.category.value, 0) + 1

        return {
            'total_errors': self.total_errors,
            'recent_errors_24h': len(self.get_recent_errors(24)),
            'error_counts_by_type': self.error_counts.copy(),
            'error_counts_by_category': by_category,
            'error_history_size': len(self.error_history),
        }

    def get_recent_errors(self, hours: int = 24) -> List[ErrorInfo]:
        """
        Get recent errors within specified time window.

        Args:
            hours: Number of hours to look back

        Returns:
            List of recent error info objects
        """
        cutoff_time = datetime.now() - timedelta(hours=hours)
        return [
            error for error in self.error_history
            if error.timestamp > cutoff_time
        ]

    def clear_error_history(self) -> None:
        """Clear error history and reset statistics."""
        self.error_history.clear()
        self.error_counts.clear()
        self.total_errors = 0

        self.logger.info("Error history and statistics cleared")
