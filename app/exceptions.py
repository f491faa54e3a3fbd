# app/exceptions.py
"""
Service-level errors. Routes translate them to HTTP status codes; batch jobs
catch them per user and keep going.
"""


class TrackerError(Exception):
    """Base class for expected tracker failures."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TrackerError):
    """Bad input: missing/duplicate username, unknown ranking period."""

    status_code = 400


class NotFoundError(TrackerError):
    """Username cannot be verified against LeetCode."""

    status_code = 404


class UpstreamError(TrackerError):
    """A LeetCode API call failed (transport, HTTP status or GraphQL error)."""

    status_code = 502
