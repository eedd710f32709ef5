class AppRunnerError(Exception):
    """Base class for all errors raised by the custom domain association utils."""


class NotFoundError(AppRunnerError):
    """
    The association (or its parent service) does not exist.

    App Runner answers `ResourceNotFoundException` both when the service is
    gone and when it simply has no such association; both cases end up here.
    """

    def __init__(self, message="couldn't find resource", last_error=None, last_request=None):
        super().__init__(message)
        self.last_error = last_error
        self.last_request = last_request


class MalformedIdentifierError(AppRunnerError):
    """A composite identifier could not be split into its two parts."""


class MultipleResultsError(AppRunnerError):
    """More than one association matched a key that must be unique."""

    def __init__(self, count: int):
        super().__init__(f"too many results: wanted 1, got {count}")
        self.count = count


class UnexpectedStateError(AppRunnerError):
    """The remote status is neither pending nor a target of the current wait."""

    def __init__(self, state: str, expected: list):
        super().__init__(
            f"unexpected state '{state}', wanted target '{', '.join(expected)}'"
        )
        self.state = state
        self.expected = expected


class WaitTimeoutError(AppRunnerError):
    """The waiter deadline elapsed before a target status was observed."""

    def __init__(self, last_state: str, expected: list, timeout: float):
        target = ", ".join(expected) if expected else "<absent>"
        super().__init__(
            f"timeout while waiting for state to become '{target}' "
            f"(last state: '{last_state}', timeout: {int(timeout)}s)"
        )
        self.last_state = last_state
        self.expected = expected
        self.timeout = timeout
