from .booking import Booking, BookingCreated, BookingDeleted, BookingStatusChanged

__all__ = ["Booking", "BookingCreated", "BookingDeleted", "BookingStatusChanged"]
