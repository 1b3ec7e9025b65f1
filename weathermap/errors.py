"""Error kinds surfaced to the user as notifications."""


class DashboardError(Exception):
    """Base class for recoverable dashboard errors."""


class DrawValidationError(DashboardError):
    """Raised when a polygon is completed with too few vertices."""


class FetchError(DashboardError):
    """Raised when the weather provider cannot be reached or answers badly."""


class SelectionError(DashboardError):
    """Raised when a region is confirmed without a polygon or data source."""
