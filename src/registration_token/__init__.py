"""
Registration token issuance.
"""

from .token_generator import TokenIssuer, TokenStore, generate_random_string, generate_unique_token

__all__ = ['TokenIssuer', 'TokenStore', 'generate_random_string', 'generate_unique_token']
