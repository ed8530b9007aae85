from .access_policy import AccessPolicy, ListScope, ScopeKind, is_visible
from .availability_filter import AvailabilityFilter
from .booking_lifecycle import ApprovalMode, BookingLifecycle
from .overlap_detector import OverlapDetector

__all__ = [
    "AccessPolicy",
    "ApprovalMode",
    "AvailabilityFilter",
    "BookingLifecycle",
    "ListScope",
    "OverlapDetector",
    "ScopeKind",
    "is_visible",
]
