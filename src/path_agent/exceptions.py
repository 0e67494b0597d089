from enum import Enum


class ResolutionErrorCode(str, Enum):
    """Outcome codes recorded while resolving a query. Never raised to callers."""

    AI_TIMEOUT = "AI_TIMEOUT"
    AI_UNREACHABLE = "AI_UNREACHABLE"
    AI_MALFORMED_RESPONSE = "AI_MALFORMED_RESPONSE"
    NO_CANDIDATES = "NO_CANDIDATES"
    VERIFY_FAILED_ALL = "VERIFY_FAILED_ALL"


class PathAgentError(Exception):
    """Base exception for path agent service."""


class ConfigurationError(PathAgentError):
    """Raised when configuration values are missing or invalid."""


class AppNotInitializedError(PathAgentError):
    """Raised when the app is used before initialization."""


class InferenceError(PathAgentError):
    """Base exception for inference backend failures."""

    code = ResolutionErrorCode.AI_UNREACHABLE


class InferenceTimeoutError(InferenceError):
    """Raised when the inference backend does not answer within the deadline."""

    code = ResolutionErrorCode.AI_TIMEOUT


class InferenceUnreachableError(InferenceError):
    """Raised when the inference backend cannot be reached or rejects the request."""

    code = ResolutionErrorCode.AI_UNREACHABLE


class MalformedInferenceResponseError(InferenceError):
    """Raised when the inference backend answers with something unparseable."""

    code = ResolutionErrorCode.AI_MALFORMED_RESPONSE
