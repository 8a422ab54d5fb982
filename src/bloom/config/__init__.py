"""
Bloom Configuration Module

Provides centralized configuration management with:
- Environment-based settings loading
- Validation of check-in policy values
- Secure handling of secrets
"""

from bloom.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
