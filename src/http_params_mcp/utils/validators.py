"""Format validators used by the validation filters."""

import ipaddress
import re
from typing import Optional
from urllib.parse import SplitResult, urlsplit

from ..constants import (
    MAX_DOMAIN_LENGTH,
    MAX_EMAIL_LENGTH,
    MAX_EMAIL_LOCAL_LENGTH,
    MAX_LABEL_LENGTH,
    URL_SCHEMES_WITHOUT_HOST,
)

HOSTNAME_LABEL = re.compile(r"^[a-zA-Z0-9]([a-zA-Z0-9-]*[a-zA-Z0-9])?$")
EMAIL_LOCAL_ATOM = re.compile(r"^[a-zA-Z0-9!#$%&'*+/=?^_`{|}~-]+$")
URL_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*$")
MAC_PATTERNS = {
    ":": re.compile(r"^[0-9a-fA-F]{2}(:[0-9a-fA-F]{2}){5}$"),
    "-": re.compile(r"^[0-9a-fA-F]{2}(-[0-9a-fA-F]{2}){5}$"),
    ".": re.compile(r"^[0-9a-fA-F]{4}(\.[0-9a-fA-F]{4}){2}$"),
}


def is_scalar(value: object) -> bool:
    """Return True for str, int, float and bool values."""
    return isinstance(value, (str, int, float, bool))


def validate_domain_name(domain: str, require_hostname: bool = False) -> bool:
    """Validate a domain name.

    Args:
        domain: The domain to validate; a single trailing dot is allowed
        require_hostname: Only allow letters, digits and inner hyphens per label

    Returns:
        True if the domain is valid
    """
    if domain.endswith("."):
        domain = domain[:-1]
    if not domain or len(domain) > MAX_DOMAIN_LENGTH:
        return False

    for label in domain.split("."):
        if not label or len(label) > MAX_LABEL_LENGTH:
            return False
        if require_hostname and not HOSTNAME_LABEL.match(label):
            return False
    return True


def validate_ip_address(
    address: str,
    allow_ipv4: bool = True,
    allow_ipv6: bool = True,
    no_private: bool = False,
    no_reserved: bool = False,
    global_only: bool = False,
) -> bool:
    """Validate an IPv4 or IPv6 address with optional range restrictions.

    Returns:
        True if the address parses and passes every requested restriction
    """
    try:
        ip = ipaddress.ip_address(address)
    except ValueError:
        return False

    if ip.version == 4 and not allow_ipv4:
        return False
    if ip.version == 6 and not allow_ipv6:
        return False
    if "%" in address:
        # Scoped IPv6 addresses are not plain addresses
        return False

    if no_private and ip.is_private and not ip.is_loopback:
        return False
    if no_reserved and (ip.is_reserved or ip.is_loopback or ip.is_unspecified or ip.is_link_local):
        return False
    if global_only and not ip.is_global:
        return False
    return True


def validate_mac_address(address: str, separator: Optional[str] = None) -> bool:
    """Validate a MAC address.

    Args:
        address: Six colon/hyphen separated octets or three dot separated quads
        separator: Restrict the accepted separator to this character

    Returns:
        True if the address is valid
    """
    if separator is not None:
        pattern = MAC_PATTERNS.get(separator)
        return bool(pattern and pattern.match(address))
    return any(pattern.match(address) for pattern in MAC_PATTERNS.values())


def validate_email_address(address: str, allow_unicode: bool = False) -> bool:
    """Validate an email address with a dot-atom local part.

    Args:
        address: The address to validate
        allow_unicode: Accept non-ASCII characters in the local part

    Returns:
        True if the address is valid
    """
    if len(address) > MAX_EMAIL_LENGTH or address.count("@") != 1:
        return False

    local, domain = address.split("@")
    if not local or len(local) > MAX_EMAIL_LOCAL_LENGTH:
        return False

    for atom in local.split("."):
        if not atom:
            return False
        checked = atom
        if allow_unicode:
            checked = "".join(ch for ch in atom if ord(ch) < 128)
            if not checked:
                continue
        if not EMAIL_LOCAL_ATOM.match(checked):
            return False

    if domain.startswith("[") and domain.endswith("]"):
        literal = domain[1:-1]
        if literal.lower().startswith("ipv6:"):
            return validate_ip_address(literal[5:], allow_ipv4=False)
        return validate_ip_address(literal, allow_ipv6=False)

    if domain.endswith(".") or "." not in domain:
        return False
    return validate_domain_name(domain, require_hostname=True)


def split_url(url: str) -> Optional[SplitResult]:
    """Split a URL, returning None if it cannot be parsed."""
    try:
        parts = urlsplit(url)
        # Accessing the port validates it
        parts.port
    except ValueError:
        return None
    return parts


def validate_url(url: str, path_required: bool = False, query_required: bool = False) -> bool:
    """Validate an absolute URL.

    Args:
        url: The URL to validate; only printable ASCII is accepted
        path_required: Require a non-empty path
        query_required: Require a non-empty query string

    Returns:
        True if the URL is valid
    """
    if not url.isascii() or any(ord(ch) <= 32 or ord(ch) == 127 for ch in url):
        return False

    scheme, _, rest = url.partition(":")
    if not rest or not URL_SCHEME.match(scheme):
        return False

    parts = split_url(url)
    if parts is None:
        return False

    if scheme.lower() not in URL_SCHEMES_WITHOUT_HOST:
        if not rest.startswith("//") or not parts.hostname:
            return False
        host = parts.hostname
        if host.startswith("[") or ":" in host:
            if not validate_ip_address(host.strip("[]"), allow_ipv4=False):
                return False
        elif scheme.lower() in ("http", "https") and not validate_domain_name(host, require_hostname=True):
            return False
        elif not validate_domain_name(host):
            return False
    elif not parts.path and not parts.netloc:
        return False

    if path_required and not parts.path:
        return False
    if query_required and not parts.query:
        return False
    return True
