"""Constants and static lookup tables for request parameter filtering."""

# Validation filters
FILTER_VALIDATE_INT = 257
FILTER_VALIDATE_BOOLEAN = 258
FILTER_VALIDATE_FLOAT = 259
FILTER_VALIDATE_REGEXP = 272
FILTER_VALIDATE_URL = 273
FILTER_VALIDATE_EMAIL = 274
FILTER_VALIDATE_IP = 275
FILTER_VALIDATE_MAC = 276
FILTER_VALIDATE_DOMAIN = 277

# Sanitization filters
FILTER_SANITIZE_STRING = 513
FILTER_SANITIZE_ENCODED = 514
FILTER_SANITIZE_SPECIAL_CHARS = 515
FILTER_UNSAFE_RAW = 516
FILTER_SANITIZE_EMAIL = 517
FILTER_SANITIZE_URL = 518
FILTER_SANITIZE_NUMBER_INT = 519
FILTER_SANITIZE_NUMBER_FLOAT = 520
FILTER_SANITIZE_FULL_SPECIAL_CHARS = 522
FILTER_SANITIZE_ADD_SLASHES = 523

FILTER_CALLBACK = 1024

# Validation filter ids live in 0x100-0x1ff
VALIDATION_FILTER_RANGE = range(0x100, 0x200)

# Filter names as accepted by resolve_filter(). The first entry per id is
# the canonical name reported by list_filters().
FILTER_NAMES = {
    "int": FILTER_VALIDATE_INT,
    "validate_int": FILTER_VALIDATE_INT,
    "boolean": FILTER_VALIDATE_BOOLEAN,
    "bool": FILTER_VALIDATE_BOOLEAN,
    "validate_bool": FILTER_VALIDATE_BOOLEAN,
    "validate_boolean": FILTER_VALIDATE_BOOLEAN,
    "float": FILTER_VALIDATE_FLOAT,
    "validate_float": FILTER_VALIDATE_FLOAT,
    "validate_regexp": FILTER_VALIDATE_REGEXP,
    "validate_url": FILTER_VALIDATE_URL,
    "validate_email": FILTER_VALIDATE_EMAIL,
    "validate_ip": FILTER_VALIDATE_IP,
    "validate_mac": FILTER_VALIDATE_MAC,
    "validate_domain": FILTER_VALIDATE_DOMAIN,
    "string": FILTER_SANITIZE_STRING,
    "stripped": FILTER_SANITIZE_STRING,
    "sanitize_string": FILTER_SANITIZE_STRING,
    "sanitize_stripped": FILTER_SANITIZE_STRING,
    "encoded": FILTER_SANITIZE_ENCODED,
    "sanitize_encoded": FILTER_SANITIZE_ENCODED,
    "special_chars": FILTER_SANITIZE_SPECIAL_CHARS,
    "sanitize_special_chars": FILTER_SANITIZE_SPECIAL_CHARS,
    "unsafe_raw": FILTER_UNSAFE_RAW,
    "default": FILTER_UNSAFE_RAW,
    "email": FILTER_SANITIZE_EMAIL,
    "sanitize_email": FILTER_SANITIZE_EMAIL,
    "url": FILTER_SANITIZE_URL,
    "sanitize_url": FILTER_SANITIZE_URL,
    "number_int": FILTER_SANITIZE_NUMBER_INT,
    "sanitize_number_int": FILTER_SANITIZE_NUMBER_INT,
    "number_float": FILTER_SANITIZE_NUMBER_FLOAT,
    "sanitize_number_float": FILTER_SANITIZE_NUMBER_FLOAT,
    "full_special_chars": FILTER_SANITIZE_FULL_SPECIAL_CHARS,
    "sanitize_full_special_chars": FILTER_SANITIZE_FULL_SPECIAL_CHARS,
    "add_slashes": FILTER_SANITIZE_ADD_SLASHES,
    "sanitize_add_slashes": FILTER_SANITIZE_ADD_SLASHES,
    "callback": FILTER_CALLBACK,
}

# Flag bits
FILTER_FLAG_NONE = 0
FILTER_FLAG_ALLOW_OCTAL = 1
FILTER_FLAG_ALLOW_HEX = 2
FILTER_FLAG_STRIP_LOW = 4
FILTER_FLAG_STRIP_HIGH = 8
FILTER_FLAG_ENCODE_LOW = 16
FILTER_FLAG_ENCODE_HIGH = 32
FILTER_FLAG_ENCODE_AMP = 64
FILTER_FLAG_NO_ENCODE_QUOTES = 128
FILTER_FLAG_EMPTY_STRING_NULL = 256
FILTER_FLAG_STRIP_BACKTICK = 512
FILTER_FLAG_ALLOW_FRACTION = 4096
FILTER_FLAG_ALLOW_THOUSAND = 8192
FILTER_FLAG_ALLOW_SCIENTIFIC = 16384
FILTER_FLAG_PATH_REQUIRED = 262144
FILTER_FLAG_QUERY_REQUIRED = 524288
FILTER_FLAG_IPV4 = 1048576
FILTER_FLAG_IPV6 = 2097152
FILTER_FLAG_NO_RES_RANGE = 4194304
FILTER_FLAG_NO_PRIV_RANGE = 8388608
FILTER_FLAG_GLOBAL_RANGE = 268435456
FILTER_FLAG_HOSTNAME = 1048576
FILTER_FLAG_EMAIL_UNICODE = 1048576

# Only meaningful for FILTER_VALIDATE_BOOLEAN when requested by name
FILTER_NULL_ON_FAILURE = 134217728

FLAG_CONSTANT_PREFIX = "FILTER_FLAG_"

# Symbolic flag constants, keyed by full constant name
FLAG_CONSTANTS = {
    "FILTER_FLAG_NONE": FILTER_FLAG_NONE,
    "FILTER_FLAG_ALLOW_OCTAL": FILTER_FLAG_ALLOW_OCTAL,
    "FILTER_FLAG_ALLOW_HEX": FILTER_FLAG_ALLOW_HEX,
    "FILTER_FLAG_STRIP_LOW": FILTER_FLAG_STRIP_LOW,
    "FILTER_FLAG_STRIP_HIGH": FILTER_FLAG_STRIP_HIGH,
    "FILTER_FLAG_ENCODE_LOW": FILTER_FLAG_ENCODE_LOW,
    "FILTER_FLAG_ENCODE_HIGH": FILTER_FLAG_ENCODE_HIGH,
    "FILTER_FLAG_ENCODE_AMP": FILTER_FLAG_ENCODE_AMP,
    "FILTER_FLAG_NO_ENCODE_QUOTES": FILTER_FLAG_NO_ENCODE_QUOTES,
    "FILTER_FLAG_EMPTY_STRING_NULL": FILTER_FLAG_EMPTY_STRING_NULL,
    "FILTER_FLAG_STRIP_BACKTICK": FILTER_FLAG_STRIP_BACKTICK,
    "FILTER_FLAG_ALLOW_FRACTION": FILTER_FLAG_ALLOW_FRACTION,
    "FILTER_FLAG_ALLOW_THOUSAND": FILTER_FLAG_ALLOW_THOUSAND,
    "FILTER_FLAG_ALLOW_SCIENTIFIC": FILTER_FLAG_ALLOW_SCIENTIFIC,
    "FILTER_FLAG_PATH_REQUIRED": FILTER_FLAG_PATH_REQUIRED,
    "FILTER_FLAG_QUERY_REQUIRED": FILTER_FLAG_QUERY_REQUIRED,
    "FILTER_FLAG_IPV4": FILTER_FLAG_IPV4,
    "FILTER_FLAG_IPV6": FILTER_FLAG_IPV6,
    "FILTER_FLAG_NO_RES_RANGE": FILTER_FLAG_NO_RES_RANGE,
    "FILTER_FLAG_NO_PRIV_RANGE": FILTER_FLAG_NO_PRIV_RANGE,
    "FILTER_FLAG_GLOBAL_RANGE": FILTER_FLAG_GLOBAL_RANGE,
    "FILTER_FLAG_HOSTNAME": FILTER_FLAG_HOSTNAME,
    "FILTER_FLAG_EMAIL_UNICODE": FILTER_FLAG_EMAIL_UNICODE,
}

NULL_ON_FAILURE_NAME = "NULL_ON_FAILURE"

# Text forms accepted by the boolean validator
BOOLEAN_TRUE_STRINGS = {"1", "true", "on", "yes"}
BOOLEAN_FALSE_STRINGS = {"0", "false", "off", "no", ""}

# Characters trimmed around numeric and boolean input
TRIM_CHARACTERS = " \t\n\r\v\x00"

# 64-bit signed integer bounds
INT_MIN = -(2**63)
INT_MAX = 2**63 - 1

# Characters kept by the removal-style sanitizers
SANITIZE_EMAIL_ALLOWED = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789!#$%&'*+-=?^_`{|}~@.[]"
)
SANITIZE_URL_ALLOWED = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789$-_.+!*'(),{}|\\^~[]`<>#%\";/?:@&="
)

# Email and domain length limits
MAX_EMAIL_LENGTH = 320
MAX_EMAIL_LOCAL_LENGTH = 64
MAX_DOMAIN_LENGTH = 253
MAX_LABEL_LENGTH = 63

# URL schemes that carry no authority component
URL_SCHEMES_WITHOUT_HOST = {"mailto", "news", "file", "urn", "tel", "data"}

# Environment variable names read by config.Settings
ENV_STRICT_FLAGS = "HTTP_PARAMS_STRICT_FLAGS"
ENV_LOG_LEVEL = "HTTP_PARAMS_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
