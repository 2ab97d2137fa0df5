"""Error Hierarchy — typed, categorized exceptions for all quiz failure modes.

Invariants:
    - Every error has a code (ErrorCode), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) mean the request was invalid for the current state;
      infrastructure errors (500-level) are critical
    - Raising a domain error never leaves a partial write behind: the shell
      validates before it writes
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with SongQuizError base: FastAPI global handler catches all
    - ErrorCode is a closed enumeration: callers branch on code, never on message text
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHORIZATION = "authorization"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


class ErrorCode(str, Enum):
    """Every distinguishable failure the API can report."""
    FORBIDDEN = "FORBIDDEN"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    QUIZ_NOT_OPEN = "QUIZ_NOT_OPEN"
    QUIZ_NOT_IN_GUESSING_PHASE = "QUIZ_NOT_IN_GUESSING_PHASE"
    NOT_PARTICIPANT = "NOT_PARTICIPANT"
    SUBMISSION_NOT_IN_QUIZ = "SUBMISSION_NOT_IN_QUIZ"
    SELF_GUESS_FORBIDDEN = "SELF_GUESS_FORBIDDEN"
    QUIZ_COMPLETED = "QUIZ_COMPLETED"
    RESULTS_NOT_AVAILABLE = "RESULTS_NOT_AVAILABLE"
    AUTHENTICATION_REQUIRED = "AUTHENTICATION_REQUIRED"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    DATABASE_ERROR = "DATABASE_ERROR"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    quiz_id: int | None = None
    user_id: str | None = None
    submission_id: int | None = None
    debug_info: dict[str, Any] | None = None


class SongQuizError(Exception):
    """Base exception for all quiz errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "quiz_id": self.context.quiz_id,
                    "user_id": self.context.user_id,
                    "submission_id": self.context.submission_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ForbiddenError(SongQuizError):
    """Actor lacks the rights for the requested action."""
    def __init__(self, action: str, context: ErrorContext | None = None):
        super().__init__(
            f"You are not allowed to {action}.",
            ErrorCode.FORBIDDEN, ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )
        self.action = action


class InvalidTransitionError(SongQuizError):
    """Requested status is not the immediate successor of the current one."""
    def __init__(
        self, current: str, target: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Cannot move quiz from '{current}' to '{target}'.",
            ErrorCode.INVALID_TRANSITION, ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.current = current
        self.target = target


class QuizNotOpenError(SongQuizError):
    """Submission attempted outside the open phase."""
    def __init__(self, status: str, context: ErrorContext | None = None):
        super().__init__(
            f"Quiz is not accepting submissions (status: {status}).",
            ErrorCode.QUIZ_NOT_OPEN, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 409,
        )
        self.status = status


class QuizNotInGuessingPhaseError(SongQuizError):
    """Guess attempted outside the guessing phase."""
    def __init__(self, status: str, context: ErrorContext | None = None):
        super().__init__(
            f"Quiz is not accepting guesses (status: {status}).",
            ErrorCode.QUIZ_NOT_IN_GUESSING_PHASE, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 409,
        )
        self.status = status


class NotParticipantError(SongQuizError):
    """Actor has not joined the quiz."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "You must join the quiz first.",
            ErrorCode.NOT_PARTICIPANT, ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class SubmissionNotInQuizError(SongQuizError):
    """Guess references a submission that belongs to another quiz."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Song submission does not belong to this quiz.",
            ErrorCode.SUBMISSION_NOT_IN_QUIZ, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )


class SelfGuessForbiddenError(SongQuizError):
    """Guesser targeted their own submission."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "You cannot guess on your own song.",
            ErrorCode.SELF_GUESS_FORBIDDEN, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 400,
        )


class QuizCompletedError(SongQuizError):
    """Membership change attempted on a finished quiz."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Quiz is completed.",
            ErrorCode.QUIZ_COMPLETED, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 409,
        )


class ResultsNotAvailableError(SongQuizError):
    """Results requested before they may be shown to this viewer."""
    def __init__(self, status: str, context: ErrorContext | None = None):
        super().__init__(
            f"Results are not available while the quiz is '{status}'.",
            ErrorCode.RESULTS_NOT_AVAILABLE, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 409,
        )
        self.status = status


class AuthenticationRequiredError(SongQuizError):
    """Request carried no identity from the upstream identity provider."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Authentication required.",
            ErrorCode.AUTHENTICATION_REQUIRED, ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ResourceNotFoundError(SongQuizError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            ErrorCode.RESOURCE_NOT_FOUND, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(SongQuizError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            ErrorCode.DATABASE_ERROR, ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
