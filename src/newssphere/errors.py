"""Exception hierarchy shared by the proxy and the client."""


class NewsSphereError(Exception):
    """Base class for all NewsSphere failures."""

    retryable: bool = False

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class RequestValidationError(NewsSphereError):
    """A request parameter failed validation (e.g. an empty search term)."""


class UpstreamError(NewsSphereError):
    """Base class for failures talking to the news provider."""


class UpstreamConfigError(UpstreamError):
    """No provider credential is configured."""


class UpstreamFormatError(UpstreamError):
    """The provider answered with something other than a JSON result envelope."""

    retryable = True


class UpstreamApiError(UpstreamError):
    """The provider reported a logical error, e.g. an invalid parameter."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class UpstreamConnectionError(UpstreamError):
    """The provider could not be reached, or did not answer in time."""

    retryable = True
