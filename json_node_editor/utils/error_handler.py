"""Error categorization and human-readable messages for JSON Node Editor."""

import logging
import time

from pydantic import ValidationError as PydanticValidationError

from ..config.loader import ConfigurationError
from ..models.errors import (
    ErrorResponse, ParseError, PathError, SessionError,
    JSONEditorException, ParseException, PathException, SessionException
)

logger = logging.getLogger(__name__)


class ErrorHandler:
    """Turns exceptions into error responses and display messages."""

    def categorize_error(self, error: Exception) -> ErrorResponse:
        """Categorize an exception into appropriate error response."""

        if isinstance(error, JSONEditorException):
            return self._handle_json_editor_exception(error)

        if isinstance(error, PydanticValidationError):
            return self._handle_pydantic_validation_error(error)

        if isinstance(error, ConfigurationError):
            return ErrorResponse(
                error_type="configuration",
                error_code="INVALID_CONFIGURATION",
                message=str(error),
                suggestions=["Check config.yaml and JSON_EDITOR_* environment variables"]
            )

        return self._handle_generic_error(error)

    def format_error_message(self, error: Exception) -> str:
        """Build the one-line message an editor shows next to the draft."""

        response = self.categorize_error(error)
        if isinstance(response, ParseError) and response.line is not None:
            return f"{response.message} (line {response.line}, column {response.column})"
        return response.message

    def _handle_json_editor_exception(self, error: JSONEditorException) -> ErrorResponse:
        """Handle known JSON Node Editor exceptions."""

        if isinstance(error, ParseException):
            return ParseError(
                error_code=error.error_code,
                message=error.message,
                details=error.details,
                line=error.details.get('line'),
                column=error.details.get('column'),
                suggestions=[
                    "Check for missing quotes, brackets, or commas",
                    "Strings must use double quotes"
                ]
            )

        if isinstance(error, PathException):
            path = error.details.get('path')
            return PathError(
                error_code=error.error_code,
                message=error.message,
                details=error.details,
                path=list(path) if isinstance(path, (list, tuple)) else None
            )

        if isinstance(error, SessionException):
            return SessionError(
                error_code=error.error_code,
                message=error.message,
                details=error.details,
                mode=error.details.get('mode')
            )

        return ErrorResponse(
            error_type="internal",
            error_code=error.error_code,
            message=error.message,
            details=error.details
        )

    def _handle_pydantic_validation_error(self, error: PydanticValidationError) -> ErrorResponse:
        """Handle Pydantic validation errors."""

        field_errors = {}
        for err in error.errors():
            field_path = ".".join(str(loc) for loc in err['loc'])
            field_errors.setdefault(field_path, []).append(err['msg'])

        summary = "; ".join(f"{field}: {', '.join(msgs)}" for field, msgs in field_errors.items())
        return ErrorResponse(
            error_type="configuration",
            error_code="VALIDATION_FAILED",
            message=f"Validation failed: {summary}",
            details={"field_errors": field_errors}
        )

    def _handle_generic_error(self, error: Exception) -> ErrorResponse:
        """Handle unexpected exceptions."""

        error_id = f"generic_{int(time.time())}"
        logger.error(f"Unhandled error [{error_id}]: {type(error).__name__}: {str(error)}",
                     exc_info=error)

        return ErrorResponse(
            error_type="internal",
            error_code="INTERNAL_ERROR",
            message=f"An unexpected error occurred: {str(error) or type(error).__name__}",
            details={
                "error_id": error_id,
                "error_type": type(error).__name__
            }
        )


_default_handler = ErrorHandler()


def handle_error(error: Exception) -> ErrorResponse:
    """Categorize an error with the shared handler."""
    return _default_handler.categorize_error(error)


def format_error_message(error: Exception) -> str:
    """Format an error for display with the shared handler."""
    return _default_handler.format_error_message(error)
