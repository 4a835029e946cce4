"""
Configuration module for the guest registration service.
"""

from .settings import firebase_config, app_config, auth_config, api_config

__all__ = ['firebase_config', 'app_config', 'auth_config', 'api_config']
