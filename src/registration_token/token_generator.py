"""
Unique registration-token issuance for bookings.
"""
import base64
import math
import secrets
from typing import Callable, Protocol

from ..utils.errors import TokenGenerationExhausted
from ..utils.logger import get_logger


class TokenStore(Protocol):
    """Anything that can tell whether a booking already uses a token."""

    def token_exists(self, token: str) -> bool:
        ...


def generate_random_string(length: int) -> str:
    """
    Return ``length`` URL-safe characters ([A-Za-z0-9_-]) from a CSPRNG.

    Raises:
        ValueError: If length is not positive
    """
    if length <= 0:
        raise ValueError("length must be a positive integer")
    random_bytes = secrets.token_bytes(math.ceil(length * 3 / 4))
    encoded = base64.urlsafe_b64encode(random_bytes).rstrip(b"=").decode()
    return encoded[:length]


class TokenIssuer:
    """Issues registration tokens that no existing booking uses."""

    def __init__(
        self,
        token_store: TokenStore,
        generator: Callable[[int], str] = generate_random_string,
        logger=None
    ):
        self.token_store = token_store
        self.generator = generator
        self.logger = logger or get_logger("guest_registration.tokens")

    def generate_unique_token(self, length: int = 12, max_retries: int = 5) -> str:
        """
        Generate a token and retry on collision.

        Args:
            length: Token length in characters
            max_retries: Number of generate/check attempts before giving up

        Returns:
            A token not present on any booking at check time

        Raises:
            ValueError: If length < 1 or max_retries < 1
            TokenGenerationExhausted: If every attempt collided
            StoreUnavailable: If a uniqueness check failed; no retry is made
        """
        if length <= 0:
            raise ValueError("length must be a positive integer")
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")

        for attempt in range(1, max_retries + 1):
            token = self.generator(length)
            # StoreUnavailable propagates: an unchecked token must never be issued
            if not self.token_store.token_exists(token):
                self.logger.info("Generated unique registration token", attempt=attempt)
                return token
            self.logger.warning("Registration token collision, retrying",
                                attempt=attempt, max_retries=max_retries)

        self.logger.error("Failed to generate a unique registration token",
                          max_retries=max_retries)
        raise TokenGenerationExhausted(
            "Could not generate a unique registration token.",
            details={"max_retries": max_retries, "length": length}
        )


def generate_unique_token(
    token_store: TokenStore,
    length: int = 12,
    max_retries: int = 5
) -> str:
    """Convenience wrapper around ``TokenIssuer.generate_unique_token``."""
    return TokenIssuer(token_store).generate_unique_token(length, max_retries)
