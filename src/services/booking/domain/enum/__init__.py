from .booking_status import BookingStatus

__all__ = ["BookingStatus"]
