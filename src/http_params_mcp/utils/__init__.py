"""Utility modules for parameter filtering."""

from .decorators import handle_filter_errors
from .validators import (
    is_scalar,
    validate_domain_name,
    validate_email_address,
    validate_ip_address,
    validate_mac_address,
    validate_url,
)

__all__ = [
    "handle_filter_errors",
    "is_scalar",
    "validate_domain_name",
    "validate_email_address",
    "validate_ip_address",
    "validate_mac_address",
    "validate_url",
]
