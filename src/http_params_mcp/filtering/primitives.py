"""
Validation and sanitization primitives.

Validation filters check a value against a format and return it, possibly
converted to a Python type. Sanitization filters remove or encode characters
and always return text. Every filter works on the text form of a scalar.
"""

import logging
import math
import re
from collections.abc import Mapping
from typing import Any, Callable, Optional

from ..constants import (
    BOOLEAN_FALSE_STRINGS,
    BOOLEAN_TRUE_STRINGS,
    FILTER_CALLBACK,
    FILTER_FLAG_ALLOW_FRACTION,
    FILTER_FLAG_ALLOW_HEX,
    FILTER_FLAG_ALLOW_OCTAL,
    FILTER_FLAG_ALLOW_SCIENTIFIC,
    FILTER_FLAG_ALLOW_THOUSAND,
    FILTER_FLAG_EMAIL_UNICODE,
    FILTER_FLAG_EMPTY_STRING_NULL,
    FILTER_FLAG_ENCODE_AMP,
    FILTER_FLAG_ENCODE_HIGH,
    FILTER_FLAG_ENCODE_LOW,
    FILTER_FLAG_GLOBAL_RANGE,
    FILTER_FLAG_HOSTNAME,
    FILTER_FLAG_IPV4,
    FILTER_FLAG_IPV6,
    FILTER_FLAG_NO_ENCODE_QUOTES,
    FILTER_FLAG_NO_PRIV_RANGE,
    FILTER_FLAG_NO_RES_RANGE,
    FILTER_FLAG_PATH_REQUIRED,
    FILTER_FLAG_QUERY_REQUIRED,
    FILTER_FLAG_STRIP_BACKTICK,
    FILTER_FLAG_STRIP_HIGH,
    FILTER_FLAG_STRIP_LOW,
    FILTER_NULL_ON_FAILURE,
    FILTER_SANITIZE_ADD_SLASHES,
    FILTER_SANITIZE_EMAIL,
    FILTER_SANITIZE_ENCODED,
    FILTER_SANITIZE_FULL_SPECIAL_CHARS,
    FILTER_SANITIZE_NUMBER_FLOAT,
    FILTER_SANITIZE_NUMBER_INT,
    FILTER_SANITIZE_SPECIAL_CHARS,
    FILTER_SANITIZE_STRING,
    FILTER_SANITIZE_URL,
    FILTER_UNSAFE_RAW,
    FILTER_VALIDATE_BOOLEAN,
    FILTER_VALIDATE_DOMAIN,
    FILTER_VALIDATE_EMAIL,
    FILTER_VALIDATE_FLOAT,
    FILTER_VALIDATE_INT,
    FILTER_VALIDATE_IP,
    FILTER_VALIDATE_MAC,
    FILTER_VALIDATE_REGEXP,
    FILTER_VALIDATE_URL,
    INT_MAX,
    INT_MIN,
    SANITIZE_EMAIL_ALLOWED,
    SANITIZE_URL_ALLOWED,
    TRIM_CHARACTERS,
    VALIDATION_FILTER_RANGE,
)
from ..exceptions import InvalidFilterOptionError
from ..utils.validators import (
    is_scalar,
    validate_domain_name,
    validate_email_address,
    validate_ip_address,
    validate_mac_address,
    validate_url,
)
from .options import OptionsRecord, normalize_options
from .outcome import FilterOutcome

logger = logging.getLogger(__name__)

# Returned by validators when the input does not conform
FAILED = object()

DECIMAL_INT = re.compile(r"[+-]?(0|[1-9][0-9]*)")
HEX_DIGITS = re.compile(r"[0-9a-fA-F]+")
OCTAL_DIGITS = re.compile(r"[0-7]+")
TAG_PATTERN = re.compile(r"<(?:[^\s>][^>]*)?(?:>|$)")
REGEXP_MODIFIERS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL, "x": re.VERBOSE, "u": 0}
BRACKET_DELIMITERS = {"(": ")", "[": "]", "{": "}", "<": ">"}
URL_ENCODE_SAFE = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-._")
SPECIAL_CHARS = frozenset("'\"<>&")
FULL_SPECIAL_CHARS = {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;", "'": "&#039;"}


def to_text(value: Any) -> str:
    """Convert a scalar to the text form filters operate on."""
    if isinstance(value, bool):
        return "1" if value else ""
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e15:
            return str(int(value))
        return repr(value)
    return str(value)


# Option helpers


def _int_option(options: Mapping[str, Any], name: str) -> Optional[int]:
    value = options.get(name)
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidFilterOptionError(name, value, "expected an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidFilterOptionError(name, value, "expected an integer") from None


def _float_option(options: Mapping[str, Any], name: str) -> Optional[float]:
    value = options.get(name)
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidFilterOptionError(name, value, "expected a number")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidFilterOptionError(name, value, "expected a number") from None


def _char_option(options: Mapping[str, Any], name: str, default: str) -> str:
    value = options.get(name, default)
    if not isinstance(value, str) or len(value) != 1:
        raise InvalidFilterOptionError(name, value, "expected a single character")
    return value


def _in_range(value: Any, minimum: Optional[Any], maximum: Optional[Any]) -> bool:
    if minimum is not None and value < minimum:
        return False
    if maximum is not None and value > maximum:
        return False
    return True


# Validation filters


def validate_int(text: str, options: Mapping[str, Any], flags: int) -> Any:
    """Validate an integer; supports hex and octal with the matching flags."""
    minimum = _int_option(options, "min_range")
    maximum = _int_option(options, "max_range")
    text = text.strip(TRIM_CHARACTERS)
    if not text:
        return FAILED

    if flags & FILTER_FLAG_ALLOW_HEX and text[:2].lower() == "0x":
        if not HEX_DIGITS.fullmatch(text[2:]):
            return FAILED
        value = int(text[2:], 16)
    elif flags & FILTER_FLAG_ALLOW_OCTAL and len(text) > 1 and text[0] == "0":
        digits = text[2:] if text[1] in "oO" else text[1:]
        if not OCTAL_DIGITS.fullmatch(digits):
            return FAILED
        value = int(digits, 8)
    elif DECIMAL_INT.fullmatch(text):
        value = int(text)
    else:
        return FAILED

    if not INT_MIN <= value <= INT_MAX:
        return FAILED
    if not _in_range(value, minimum, maximum):
        return FAILED
    return value


def validate_boolean(text: str, options: Mapping[str, Any], flags: int) -> Any:
    """Validate a boolean: 1/true/on/yes and 0/false/off/no/empty."""
    text = text.strip(TRIM_CHARACTERS).lower()
    if text in BOOLEAN_TRUE_STRINGS:
        return True
    if text in BOOLEAN_FALSE_STRINGS:
        return False
    return FAILED


def _float_pattern(decimal: str, thousand: str, allow_thousand: bool) -> "re.Pattern[str]":
    digits = r"\d+"
    separators = thousand.replace(decimal, "")
    if allow_thousand and separators:
        digits = rf"(?:\d{{1,3}}(?:[{re.escape(separators)}]\d{{3}})+|\d+)"
    point = re.escape(decimal)
    return re.compile(rf"[+-]?(?:{digits}(?:{point}\d*)?|{point}\d+)(?:[eE][+-]?\d+)?")


def validate_float(text: str, options: Mapping[str, Any], flags: int) -> Any:
    """Validate a float with configurable decimal and thousand separators."""
    decimal = _char_option(options, "decimal", ".")
    thousand = options.get("thousand", "',.")
    if not isinstance(thousand, str) or not thousand:
        raise InvalidFilterOptionError("thousand", thousand, "expected a non-empty string")
    minimum = _float_option(options, "min_range")
    maximum = _float_option(options, "max_range")

    text = text.strip(TRIM_CHARACTERS)
    allow_thousand = bool(flags & FILTER_FLAG_ALLOW_THOUSAND)
    if not _float_pattern(decimal, thousand, allow_thousand).fullmatch(text):
        return FAILED

    if allow_thousand:
        for separator in thousand.replace(decimal, ""):
            text = text.replace(separator, "")
    value = float(text.replace(decimal, "."))
    if not math.isfinite(value):
        return FAILED
    if not _in_range(value, minimum, maximum):
        return FAILED
    return value


def compile_delimited_regexp(expression: Any) -> "re.Pattern[str]":
    """Compile a delimited pattern such as '/^[a-z]+$/i'.

    Raises:
        InvalidFilterOptionError: If the pattern is missing or malformed
    """
    if not isinstance(expression, str) or len(expression) < 2:
        raise InvalidFilterOptionError("regexp", expression, "expected a delimited pattern")

    opening = expression[0]
    if opening.isalnum() or opening.isspace() or opening == "\\":
        raise InvalidFilterOptionError("regexp", expression, "delimiter must not be alphanumeric or backslash")
    closing = BRACKET_DELIMITERS.get(opening, opening)
    end = expression.rfind(closing)
    if end <= 0:
        raise InvalidFilterOptionError("regexp", expression, "no ending delimiter")

    re_flags = 0
    for modifier in expression[end + 1 :]:
        if modifier not in REGEXP_MODIFIERS:
            raise InvalidFilterOptionError("regexp", expression, f"unknown modifier '{modifier}'")
        re_flags |= REGEXP_MODIFIERS[modifier]

    try:
        return re.compile(expression[1:end], re_flags)
    except re.error as e:
        raise InvalidFilterOptionError("regexp", expression, str(e)) from None


def validate_regexp(text: str, options: Mapping[str, Any], flags: int) -> Any:
    """Validate against the 'regexp' option."""
    if "regexp" not in options:
        raise InvalidFilterOptionError("regexp", None, "option missing")
    pattern = compile_delimited_regexp(options["regexp"])
    return text if pattern.search(text) else FAILED


def validate_url_filter(text: str, options: Mapping[str, Any], flags: int) -> Any:
    path_required = bool(flags & FILTER_FLAG_PATH_REQUIRED)
    query_required = bool(flags & FILTER_FLAG_QUERY_REQUIRED)
    return text if validate_url(text, path_required, query_required) else FAILED


def validate_email_filter(text: str, options: Mapping[str, Any], flags: int) -> Any:
    return text if validate_email_address(text, bool(flags & FILTER_FLAG_EMAIL_UNICODE)) else FAILED


def validate_ip_filter(text: str, options: Mapping[str, Any], flags: int) -> Any:
    allow_ipv4 = bool(flags & FILTER_FLAG_IPV4)
    allow_ipv6 = bool(flags & FILTER_FLAG_IPV6)
    if not allow_ipv4 and not allow_ipv6:
        allow_ipv4 = allow_ipv6 = True
    valid = validate_ip_address(
        text,
        allow_ipv4=allow_ipv4,
        allow_ipv6=allow_ipv6,
        no_private=bool(flags & FILTER_FLAG_NO_PRIV_RANGE),
        no_reserved=bool(flags & FILTER_FLAG_NO_RES_RANGE),
        global_only=bool(flags & FILTER_FLAG_GLOBAL_RANGE),
    )
    return text if valid else FAILED


def validate_mac_filter(text: str, options: Mapping[str, Any], flags: int) -> Any:
    separator = None
    if "separator" in options:
        separator = _char_option(options, "separator", ":")
    return text if validate_mac_address(text, separator) else FAILED


def validate_domain_filter(text: str, options: Mapping[str, Any], flags: int) -> Any:
    return text if validate_domain_name(text, bool(flags & FILTER_FLAG_HOSTNAME)) else FAILED


# Sanitization filters


def strip_characters(text: str, flags: int) -> str:
    """Remove low, high or backtick characters as requested by flags."""
    if flags & FILTER_FLAG_STRIP_LOW:
        text = "".join(ch for ch in text if ord(ch) >= 32)
    if flags & FILTER_FLAG_STRIP_HIGH:
        text = "".join(ch for ch in text if ord(ch) < 128)
    if flags & FILTER_FLAG_STRIP_BACKTICK:
        text = text.replace("`", "")
    return text


def encode_characters(text: str, flags: int, always: frozenset = frozenset()) -> str:
    """Replace selected characters with numeric HTML entities."""

    def should_encode(ch: str) -> bool:
        code = ord(ch)
        return (
            ch in always
            or (flags & FILTER_FLAG_ENCODE_AMP and ch == "&")
            or (flags & FILTER_FLAG_ENCODE_LOW and code < 32)
            or (flags & FILTER_FLAG_ENCODE_HIGH and code > 127)
        )

    return "".join(f"&#{ord(ch)};" if should_encode(ch) else ch for ch in text)


def sanitize_unsafe_raw(text: str, options: Mapping[str, Any], flags: int) -> str:
    return encode_characters(strip_characters(text, flags), flags)


def sanitize_string(text: str, options: Mapping[str, Any], flags: int) -> str:
    """Strip tags and encode quotes."""
    quotes = frozenset() if flags & FILTER_FLAG_NO_ENCODE_QUOTES else frozenset("'\"")
    text = encode_characters(strip_characters(text, flags), flags, quotes)
    return TAG_PATTERN.sub("", text).replace("\x00", "")


def sanitize_encoded(text: str, options: Mapping[str, Any], flags: int) -> str:
    """Percent-encode everything except letters, digits and '-._'."""
    text = strip_characters(text, flags)
    return "".join(
        chr(byte) if chr(byte) in URL_ENCODE_SAFE else f"%{byte:02X}" for byte in text.encode("utf-8")
    )


def sanitize_special_chars(text: str, options: Mapping[str, Any], flags: int) -> str:
    text = strip_characters(text, flags)
    always = SPECIAL_CHARS | frozenset(ch for ch in text if ord(ch) < 32)
    return encode_characters(text, flags & FILTER_FLAG_ENCODE_HIGH, always)


def sanitize_full_special_chars(text: str, options: Mapping[str, Any], flags: int) -> str:
    table = dict(FULL_SPECIAL_CHARS)
    if flags & FILTER_FLAG_NO_ENCODE_QUOTES:
        del table['"'], table["'"]
    return text.translate(str.maketrans(table))


def _keep_only(allowed: frozenset) -> Callable[[str, Mapping[str, Any], int], str]:
    def sanitize(text: str, options: Mapping[str, Any], flags: int) -> str:
        return "".join(ch for ch in text if ch in allowed)

    return sanitize


def sanitize_number_int(text: str, options: Mapping[str, Any], flags: int) -> str:
    return "".join(ch for ch in text if ch.isascii() and (ch.isdigit() or ch in "+-"))


def sanitize_number_float(text: str, options: Mapping[str, Any], flags: int) -> str:
    allowed = set("0123456789+-")
    if flags & FILTER_FLAG_ALLOW_FRACTION:
        allowed.add(".")
    if flags & FILTER_FLAG_ALLOW_THOUSAND:
        allowed.add(",")
    if flags & FILTER_FLAG_ALLOW_SCIENTIFIC:
        allowed.update("eE")
    return "".join(ch for ch in text if ch in allowed)


def sanitize_add_slashes(text: str, options: Mapping[str, Any], flags: int) -> str:
    return text.replace("\\", "\\\\").replace("'", "\\'").replace('"', '\\"').replace("\x00", "\\0")


VALIDATORS: dict[int, Callable[[str, Mapping[str, Any], int], Any]] = {
    FILTER_VALIDATE_INT: validate_int,
    FILTER_VALIDATE_BOOLEAN: validate_boolean,
    FILTER_VALIDATE_FLOAT: validate_float,
    FILTER_VALIDATE_REGEXP: validate_regexp,
    FILTER_VALIDATE_URL: validate_url_filter,
    FILTER_VALIDATE_EMAIL: validate_email_filter,
    FILTER_VALIDATE_IP: validate_ip_filter,
    FILTER_VALIDATE_MAC: validate_mac_filter,
    FILTER_VALIDATE_DOMAIN: validate_domain_filter,
}

SANITIZERS: dict[int, Callable[[str, Mapping[str, Any], int], str]] = {
    FILTER_SANITIZE_STRING: sanitize_string,
    FILTER_SANITIZE_ENCODED: sanitize_encoded,
    FILTER_SANITIZE_SPECIAL_CHARS: sanitize_special_chars,
    FILTER_UNSAFE_RAW: sanitize_unsafe_raw,
    FILTER_SANITIZE_EMAIL: _keep_only(SANITIZE_EMAIL_ALLOWED),
    FILTER_SANITIZE_URL: _keep_only(SANITIZE_URL_ALLOWED),
    FILTER_SANITIZE_NUMBER_INT: sanitize_number_int,
    FILTER_SANITIZE_NUMBER_FLOAT: sanitize_number_float,
    FILTER_SANITIZE_FULL_SPECIAL_CHARS: sanitize_full_special_chars,
    FILTER_SANITIZE_ADD_SLASHES: sanitize_add_slashes,
}


def _failure(record: OptionsRecord, flags: int) -> FilterOutcome:
    if record.has_default:
        return FilterOutcome.default(record.default)
    if flags & FILTER_NULL_ON_FAILURE:
        return FilterOutcome.absent()
    return FilterOutcome.failure()


def run_filter(value: Any, filter_id: int, options: Any = None, flags: int = 0) -> FilterOutcome:
    """Apply a filter to a scalar value.

    Args:
        value: The scalar to filter
        filter_id: One of the FILTER_* ids
        options: Options mapping, scalar default or OptionsRecord
        flags: Combined flag bits

    Returns:
        FilterOutcome; failed validation yields the options default if one
        is set, otherwise None under FILTER_NULL_ON_FAILURE, otherwise False
    """
    record = normalize_options(options)

    if not is_scalar(value):
        logger.debug(f"Refusing to filter non-scalar value of type {type(value).__name__}")
        return _failure(record, flags)

    text = to_text(value)

    try:
        if filter_id in VALIDATORS:
            if text == "" and filter_id != FILTER_VALIDATE_BOOLEAN:
                return _failure(record, flags)
            result = VALIDATORS[filter_id](text, record.extra, flags)
            if result is FAILED:
                return _failure(record, flags)
            return FilterOutcome.filtered(result)

        if filter_id in SANITIZERS:
            result = SANITIZERS[filter_id](text, record.extra, flags)
        elif filter_id == FILTER_CALLBACK:
            callback = record.extra.get("callback")
            if not callable(callback):
                raise InvalidFilterOptionError("callback", callback, "expected a callable")
            try:
                result = callback(text)
            except Exception as e:
                logger.warning(f"Callback filter {getattr(callback, '__name__', callback)!r} failed: {e}")
                return FilterOutcome.failure()
        else:
            logger.warning(f"Unknown filter with ID {filter_id}")
            return FilterOutcome.failure()

    except InvalidFilterOptionError as e:
        logger.warning(f"Filter {filter_id} misconfigured: {e}")
        if filter_id in VALIDATION_FILTER_RANGE:
            return _failure(record, flags)
        return FilterOutcome.failure()

    if result == "" and flags & FILTER_FLAG_EMPTY_STRING_NULL:
        return FilterOutcome.absent()
    return FilterOutcome.filtered(result)


def filter_var(value: Any, filter_id: int, options: Any = None, flags: int = 0) -> Any:
    """Apply a filter and return the plain result value."""
    return run_filter(value, filter_id, options, flags).value
