"""
API routes and endpoints.
"""

from . import auth, bookings, countries, health, properties, register, registrations

__all__ = ["auth", "bookings", "countries", "health", "properties", "register", "registrations"]
