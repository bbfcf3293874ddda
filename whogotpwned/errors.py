# whogotpwned/errors.py


class QueryError(Exception):
    """Base error for a failed check or stats request. `message` is safe to show to clients."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(QueryError):
    status_code = 400


class UpstreamFailure(QueryError):
    status_code = 500


class InternalError(QueryError):
    status_code = 500
