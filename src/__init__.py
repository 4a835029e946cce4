"""
Guest Registration Service.

Booking management and guest self-registration for short-term rentals,
backed by Firebase Firestore, Storage and Auth.
"""

__version__ = "1.0.0"
__description__ = "Booking management and guest self-registration for short-term rentals"
