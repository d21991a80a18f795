"""Error models for JSON Node Editor."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error_type: str = Field(..., description="Category of error (parse, path, session, configuration)")
    error_code: str = Field(..., description="Specific error code for programmatic handling")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(default=None, description="Additional error details")
    suggestions: Optional[List[str]] = Field(default=None, description="Suggested actions to resolve the error")

    @field_validator('error_type')
    @classmethod
    def validate_error_type(cls, v):
        """Ensure error type is one of the allowed categories."""
        allowed_types = ["parse", "path", "session", "configuration", "internal"]
        if v not in allowed_types:
            raise ValueError(f"Error type must be one of: {', '.join(allowed_types)}")
        return v

    @field_validator('error_code')
    @classmethod
    def validate_error_code(cls, v):
        """Ensure error code is not empty."""
        if not v or not v.strip():
            raise ValueError("Error code cannot be empty")
        return v.strip().upper()

    @field_validator('message')
    @classmethod
    def validate_message(cls, v):
        """Ensure message is not empty."""
        if not v or not v.strip():
            raise ValueError("Error message cannot be empty")
        return v.strip()


class ParseError(ErrorResponse):
    """Error model for malformed JSON text."""

    error_type: str = Field(default="parse", description="Error type is always parse")
    line: Optional[int] = Field(default=None, description="1-based line of the failure")
    column: Optional[int] = Field(default=None, description="1-based column of the failure")


class PathError(ErrorResponse):
    """Error model for paths that cannot be read or written."""

    error_type: str = Field(default="path", description="Error type is always path")
    path: Optional[List[Any]] = Field(default=None, description="Segments of the offending path")


class SessionError(ErrorResponse):
    """Error model for edit session misuse."""

    error_type: str = Field(default="session", description="Error type is always session")
    mode: Optional[str] = Field(default=None, description="Session mode when the error occurred")


# Exception classes for raising errors
class JSONEditorException(Exception):
    """Base exception for JSON Node Editor."""

    def __init__(self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ParseException(JSONEditorException):
    """Exception for JSON text that fails to parse."""

    def __init__(self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(error_code, message, details)
        self.error_type = "parse"


class PathException(JSONEditorException):
    """Exception for invalid paths or paths that cannot be written."""

    def __init__(self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(error_code, message, details)
        self.error_type = "path"


class SessionException(JSONEditorException):
    """Exception for transitions attempted from the wrong session state."""

    def __init__(self, error_code: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(error_code, message, details)
        self.error_type = "session"
