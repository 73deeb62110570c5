"""
Unified Error Handler Service
Records upstream feed failures and API errors with consistent structured
logging, so that degraded responses can still be traced.
"""

import asyncio
import functools
import inspect
import json
import traceback
import uuid
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

import structlog

logger = structlog.get_logger(__name__)


class ErrorSeverity(Enum):
    """Error severity levels for classification and handling."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for better organization and handling."""
    VALIDATION = "validation"
    NETWORK = "network"
    EXTERNAL_API = "external_api"
    DATA_PROCESSING = "data_processing"
    SYSTEM = "system"
    UNKNOWN = "unknown"


@dataclass
class ErrorContext:
    """Context information for error handling."""

    error_id: str
    timestamp: str
    service_name: str
    operation_name: str
    request_id: Optional[str] = None
    additional_data: Optional[Dict[str, Any]] = None


@dataclass
class StandardError:
    """Standardized error structure for consistent handling."""

    error_id: str
    error_code: str
    message: str
    user_message: str
    severity: ErrorSeverity
    category: ErrorCategory
    context: ErrorContext
    technical_details: Optional[str] = None
    suggested_actions: Optional[list] = None
    retry_after: Optional[int] = None  # Seconds to wait before retry

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            "error_id": self.error_id,
            "error_code": self.error_code,
            "message": self.message,
            "user_message": self.user_message,
            "severity": self.severity.value,
            "category": self.category.value,
            "timestamp": self.context.timestamp,
            "suggested_actions": self.suggested_actions or [],
            "retry_after": self.retry_after
        }

    def to_user_dict(self) -> Dict[str, Any]:
        """Convert to user-friendly dictionary (no technical details)."""
        return {
            "error_id": self.error_id,
            "message": self.user_message,
            "severity": self.severity.value,
            "suggested_actions": self.suggested_actions or [],
            "retry_after": self.retry_after
        }


ERROR_CODES: Dict[str, Dict[str, Any]] = {
    # Validation errors
    "INVALID_INPUT": {
        "category": ErrorCategory.VALIDATION,
        "severity": ErrorSeverity.MEDIUM,
        "user_message": "The provided input is invalid. Please check your data and try again.",
        "suggested_actions": ["Verify input format", "Check required fields"]
    },
    "UNKNOWN_DOMAIN": {
        "category": ErrorCategory.VALIDATION,
        "severity": ErrorSeverity.LOW,
        "user_message": "The requested data domain does not exist.",
        "suggested_actions": ["Use one of: traffic, power, water, health, safety"]
    },

    # Upstream feed errors
    "UPSTREAM_TIMEOUT": {
        "category": ErrorCategory.NETWORK,
        "severity": ErrorSeverity.MEDIUM,
        "user_message": "A live data feed did not respond in time. Fallback values are shown.",
        "suggested_actions": ["Retry in a few moments"],
        "retry_after": 30
    },
    "UPSTREAM_CONNECTION_FAILED": {
        "category": ErrorCategory.NETWORK,
        "severity": ErrorSeverity.MEDIUM,
        "user_message": "Unable to reach a live data feed. Fallback values are shown.",
        "suggested_actions": ["Check network connection", "Try again later"],
        "retry_after": 60
    },
    "UPSTREAM_HTTP_ERROR": {
        "category": ErrorCategory.EXTERNAL_API,
        "severity": ErrorSeverity.MEDIUM,
        "user_message": "A live data feed returned an error. Fallback values are shown.",
        "suggested_actions": ["Try again later"],
        "retry_after": 60
    },
    "UPSTREAM_MALFORMED_PAYLOAD": {
        "category": ErrorCategory.DATA_PROCESSING,
        "severity": ErrorSeverity.MEDIUM,
        "user_message": "A live data feed returned unexpected data. Fallback values are shown.",
        "suggested_actions": ["Try again later"]
    },

    # Generic errors
    "UNKNOWN_ERROR": {
        "category": ErrorCategory.UNKNOWN,
        "severity": ErrorSeverity.HIGH,
        "user_message": "An unexpected error occurred. Please try again or contact support.",
        "suggested_actions": ["Try again", "Contact support with error ID"]
    }
}


class ErrorHandler:
    """
    Unified error handler for consistent error management across services.
    Provides structured logging, user feedback, and error statistics.
    """

    def __init__(self, service_name: str, log_dir: Optional[str] = None, history_limit: int = 500):
        """
        Initialize error handler for a specific service.

        Args:
            service_name: Name of the service using this error handler
            log_dir: Directory for JSON-lines error logs; disabled when None
            history_limit: Number of recent errors kept in memory
        """
        self.service_name = service_name
        self.log_dir = Path(log_dir) if log_dir else None
        if self.log_dir:
            self.log_dir.mkdir(parents=True, exist_ok=True)
        self.history_limit = history_limit

        self.error_history: List[StandardError] = []
        self.error_counts: Dict[str, Dict[str, Any]] = {}
        self.error_codes = ERROR_CODES

    def handle_error(
        self,
        error: Union[Exception, str],
        error_code: Optional[str] = None,
        operation_name: str = "unknown_operation",
        request_id: Optional[str] = None,
        additional_data: Optional[Dict[str, Any]] = None,
        custom_user_message: Optional[str] = None
    ) -> StandardError:
        """
        Handle an error with consistent logging and user feedback.

        Args:
            error: Exception or error message
            error_code: Predefined error code for classification
            operation_name: Name of the operation that failed
            request_id: Request ID for tracking
            additional_data: Additional context data
            custom_user_message: Custom user-friendly message

        Returns:
            StandardError object with all error details
        """
        error_id = str(uuid.uuid4())

        context = ErrorContext(
            error_id=error_id,
            timestamp=datetime.now().isoformat(),
            service_name=self.service_name,
            operation_name=operation_name,
            request_id=request_id,
            additional_data=additional_data
        )

        if isinstance(error, Exception):
            error_message = str(error) or type(error).__name__
            technical_details = "".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            )
            if error_code is None:
                error_code = self._infer_error_code(error)
        else:
            error_message = str(error)
            technical_details = None
            error_code = error_code or "UNKNOWN_ERROR"

        error_config = self.error_codes.get(error_code, self.error_codes["UNKNOWN_ERROR"])

        standard_error = StandardError(
            error_id=error_id,
            error_code=error_code,
            message=error_message,
            user_message=custom_user_message or error_config["user_message"],
            severity=error_config["severity"],
            category=error_config["category"],
            context=context,
            technical_details=technical_details,
            suggested_actions=error_config.get("suggested_actions"),
            retry_after=error_config.get("retry_after")
        )

        self._log_error(standard_error)
        self._track_error(standard_error)

        self.error_history.append(standard_error)
        if len(self.error_history) > self.history_limit:
            self.error_history = self.error_history[-self.history_limit:]

        return standard_error

    def _infer_error_code(self, error: Exception) -> str:
        """Infer error code from exception type."""
        if isinstance(error, asyncio.TimeoutError):
            return "UPSTREAM_TIMEOUT"
        if isinstance(error, ConnectionError):
            return "UPSTREAM_CONNECTION_FAILED"

        type_mappings = {
            "ValueError": "INVALID_INPUT",
            "ValidationError": "UPSTREAM_MALFORMED_PAYLOAD",
            "KeyError": "UPSTREAM_MALFORMED_PAYLOAD",
            "ClientResponseError": "UPSTREAM_HTTP_ERROR",
            "UpstreamError": "UPSTREAM_HTTP_ERROR",
            "ClientConnectorError": "UPSTREAM_CONNECTION_FAILED",
            "ServerTimeoutError": "UPSTREAM_TIMEOUT",
        }
        return type_mappings.get(type(error).__name__, "UNKNOWN_ERROR")

    def _log_error(self, error: StandardError):
        """Log error with appropriate level based on severity."""
        log_data = {
            "error_id": error.error_id,
            "error_code": error.error_code,
            "message": error.message,
            "severity": error.severity.value,
            "category": error.category.value,
            "service": self.service_name,
            "operation": error.context.operation_name,
            "request_id": error.context.request_id
        }

        if error.severity == ErrorSeverity.CRITICAL:
            logger.critical("Critical error occurred", **log_data, technical_details=error.technical_details)
        elif error.severity == ErrorSeverity.HIGH:
            logger.error("High severity error occurred", **log_data, technical_details=error.technical_details)
        elif error.severity == ErrorSeverity.MEDIUM:
            logger.warning("Medium severity error occurred", **log_data)
        else:
            logger.info("Low severity error occurred", **log_data)

        if self.log_dir:
            self._write_error_log(error)

    def _write_error_log(self, error: StandardError):
        """Append the error to the daily JSON-lines log file."""
        try:
            log_file = self.log_dir / f"errors_{datetime.now().strftime('%Y%m%d')}.json"

            error_log_entry = {
                "timestamp": error.context.timestamp,
                "error_id": error.error_id,
                "service": self.service_name,
                "error_code": error.error_code,
                "message": error.message,
                "severity": error.severity.value,
                "category": error.category.value,
                "operation": error.context.operation_name,
                "request_id": error.context.request_id,
                "technical_details": error.technical_details,
                "additional_data": error.context.additional_data
            }

            with open(log_file, 'a') as f:
                f.write(json.dumps(error_log_entry, default=str) + '\n')

        except OSError as e:
            logger.warning("Failed to write error log", error=str(e))

    def _track_error(self, error: StandardError):
        """Track error statistics for monitoring."""
        error_key = f"{error.category.value}:{error.error_code}"

        if error_key not in self.error_counts:
            self.error_counts[error_key] = {
                "count": 0,
                "first_occurrence": error.context.timestamp,
                "last_occurrence": error.context.timestamp,
                "severity": error.severity.value
            }

        self.error_counts[error_key]["count"] += 1
        self.error_counts[error_key]["last_occurrence"] = error.context.timestamp

    def get_error_statistics(self) -> Dict[str, Any]:
        """Get error statistics for monitoring and analysis."""
        total_errors = len(self.error_history)

        if total_errors == 0:
            return {"message": "No errors recorded"}

        severity_counts: Dict[str, int] = {}
        category_counts: Dict[str, int] = {}

        for error in self.error_history:
            severity = error.severity.value
            category = error.category.value

            severity_counts[severity] = severity_counts.get(severity, 0) + 1
            category_counts[category] = category_counts.get(category, 0) + 1

        return {
            "summary": {
                "total_errors": total_errors,
                "service": self.service_name
            },
            "by_severity": severity_counts,
            "by_category": category_counts,
            "error_counts": self.error_counts,
            "recent_errors": [
                {
                    "error_id": error.error_id,
                    "error_code": error.error_code,
                    "severity": error.severity.value,
                    "category": error.category.value,
                    "timestamp": error.context.timestamp,
                    "operation": error.context.operation_name
                }
                for error in self.error_history[-10:]
            ]
        }

    def create_api_response(self, error: StandardError, include_technical: bool = False) -> Dict[str, Any]:
        """
        Create API response from standardized error.

        Args:
            error: StandardError object
            include_technical: Whether to include technical details

        Returns:
            API response dictionary
        """
        response = error.to_dict() if include_technical else error.to_user_dict()
        response["service"] = self.service_name
        response["operation"] = error.context.operation_name
        return response

    def wrap_operation(self, operation_name: str, error_code: Optional[str] = None, fallback: Any = None):
        """
        Decorator that records failures and returns ``fallback`` instead of raising.

        Args:
            operation_name: Name of the operation
            error_code: Default error code for this operation
            fallback: Value returned when the operation fails

        Returns:
            Decorator function
        """
        def decorator(func: Callable):
            if inspect.iscoroutinefunction(func):
                @functools.wraps(func)
                async def async_wrapper(*args, **kwargs):
                    try:
                        return await func(*args, **kwargs)
                    except Exception as e:
                        self.handle_error(error=e, error_code=error_code, operation_name=operation_name)
                        return fallback
                return async_wrapper

            @functools.wraps(func)
            def sync_wrapper(*args, **kwargs):
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    self.handle_error(error=e, error_code=error_code, operation_name=operation_name)
                    return fallback
            return sync_wrapper

        return decorator


# Global error handlers for different services
_error_handlers: Dict[str, ErrorHandler] = {}


def get_error_handler(service_name: str, log_dir: Optional[str] = None) -> ErrorHandler:
    """Get or create error handler for a service."""
    if service_name not in _error_handlers:
        _error_handlers[service_name] = ErrorHandler(service_name, log_dir=log_dir)
    return _error_handlers[service_name]



def list_error_handlers() -> Dict[str, ErrorHandler]:
    """Snapshot of every error handler created so far, keyed by service name."""
    return dict(_error_handlers)
