"""Service clients for the booking store."""

from .booking_store import BookingStore, BookingStoreClient, BookingStoreError

__all__ = [
    "BookingStore",
    "BookingStoreClient",
    "BookingStoreError",
]
