from typing import Optional

from sentry_sender.constants import EXIT_CODE_FAILURE


class SentrySenderError(Exception):
    """
    Generic sentry-sender error.

    Args:
        message (str): The error message.
    """
    def __init__(self, message: str = "An error occurred while sending an event to Sentry."):
        self.message = message
        super().__init__(self.message)

    def get_exit_code(self) -> int:
        """
        Get the exit code associated with this error.

        Returns:
            int: The exit code.
        """
        return EXIT_CODE_FAILURE


class InvalidConfigurationError(SentrySenderError):
    """
    Error raised when the DSN or another static setting is invalid.

    Retrying cannot fix it, so the event is never sent.

    Args:
        reason (Optional[str]): Why the configuration was rejected.
        message (str): The error message template.
    """
    def __init__(self, reason: Optional[str] = None,
                 message: str = "Cannot send event because of invalid DSN"):
        self.reason = reason
        info = f": {reason}" if reason else ""
        super().__init__(message + info)


class EncodingError(SentrySenderError):
    """
    Error raised when an event cannot be serialized to JSON.

    Args:
        reason (str): The serializer's complaint.
    """
    def __init__(self, reason: str = ""):
        self.reason = reason
        super().__init__(f"Unable to encode Sentry error - {reason}")


class TransportError(SentrySenderError):
    """
    Error describing one failed delivery attempt.

    Args:
        status_code (Optional[int]): HTTP status, None when no response was received.
        body (str): The request body that failed to be delivered.
        error_header (str): The server-provided X-Sentry-Error value, if any.
        reason (Optional[str]): Transport failure description for connection errors.
    """
    def __init__(self, status_code: Optional[int] = None, body: str = "",
                 error_header: str = "", reason: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        self.error_header = error_header
        self.reason = reason

        if status_code is not None:
            message = f"{body}\nReceived {status_code} from Sentry server: {error_header}"
        else:
            message = f"{body}\n{reason}" if reason else body

        super().__init__(message)


class HookShapeError(SentrySenderError, TypeError):
    """
    Error raised when a configured hook is neither a callable of the right
    arity nor a (target, function) reference.

    Args:
        hook_name (str): The configuration key of the hook.
        arity (int): Number of positional arguments the hook receives.
    """
    def __init__(self, hook_name: str, arity: int):
        self.hook_name = hook_name
        self.arity = arity
        super().__init__(
            f"{hook_name} must be a function accepting {arity} argument(s) "
            "or a (module, function) reference"
        )
