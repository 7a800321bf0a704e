class PortfolioError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotFoundError(PortfolioError):
    """The referenced photo does not exist."""

    status_code = 404


class BadRequestError(PortfolioError):
    """The request is missing a required correlation key."""

    status_code = 400


class InternalError(PortfolioError):
    """
    Unexpected persistence failure.
    The detail is a generic message; the underlying cause is only logged.
    """

    status_code = 500
