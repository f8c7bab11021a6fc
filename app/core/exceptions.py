"""Domain exceptions raised by services and mapped to HTTP errors by routers."""


class GigValidationError(ValueError):
    """A gig record is structurally invalid (e.g. unknown bonus type)."""

    def __init__(self, message: str, gig_id: object | None = None):
        super().__init__(message)
        self.gig_id = gig_id


class PeriodError(ValueError):
    """Report period parameters cannot be resolved to a date range."""


class GigNotFoundError(LookupError):
    """Gig does not exist or does not belong to the current user."""


class GigOwnershipError(PermissionError):
    """Some gigs in a bulk request are missing or owned by another user."""
