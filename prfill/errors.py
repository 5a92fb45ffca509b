"""Exceptions raised across prfill."""


class PrfillError(Exception):
    """Base class for every prfill error."""


class MalformedReference(PrfillError, ValueError):
    """A pull request URL did not have the expected shape."""


class MissingCredential(PrfillError):
    def __init__(self, name: str) -> None:
        super().__init__(f"{name} environment variable not set")
        self.name = name


class UpstreamError(PrfillError):
    """A remote API call failed.

    ``code`` is the HTTP status, or None when no usable response came back
    (transport error, empty body, no completion choices).
    """

    def __init__(self, code: int | None, message: str, payload: str | None = None) -> None:
        detail = f"{code} {message}" if code is not None else message
        if payload:
            detail = f"{detail}. Details: {payload}"
        super().__init__(detail)
        self.code = code
        self.message = message
        self.payload = payload
