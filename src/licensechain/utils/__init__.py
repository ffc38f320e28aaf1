"""Shared helpers: validation, text, formatting, hashing and encoding."""

from licensechain.utils.crypto import (
    base64_decode,
    base64_encode,
    generate_license_key,
    generate_random_bytes,
    generate_random_string,
    generate_uuid,
    md5,
    sha1,
    sha256,
    url_decode,
    url_encode,
)
from licensechain.utils.formatting import (
    current_date,
    current_timestamp,
    format_bytes,
    format_duration,
    format_price,
    format_timestamp,
    parse_timestamp,
)
from licensechain.utils.text import (
    capitalize_first,
    chunk_list,
    sanitize_input,
    slugify,
    to_pascal_case,
    to_snake_case,
    truncate_string,
)
from licensechain.utils.validation import (
    is_valid_json,
    is_valid_url,
    require_uuid,
    validate_amount,
    validate_currency,
    validate_date_range,
    validate_email,
    validate_license_key,
    validate_not_empty,
    validate_pagination,
    validate_positive,
    validate_range,
    validate_uuid,
)

__all__ = [
    "base64_decode",
    "base64_encode",
    "capitalize_first",
    "chunk_list",
    "current_date",
    "current_timestamp",
    "format_bytes",
    "format_duration",
    "format_price",
    "format_timestamp",
    "generate_license_key",
    "generate_random_bytes",
    "generate_random_string",
    "generate_uuid",
    "is_valid_json",
    "is_valid_url",
    "md5",
    "parse_timestamp",
    "require_uuid",
    "sanitize_input",
    "sha1",
    "sha256",
    "slugify",
    "to_pascal_case",
    "to_snake_case",
    "truncate_string",
    "url_decode",
    "url_encode",
    "validate_amount",
    "validate_currency",
    "validate_date_range",
    "validate_email",
    "validate_license_key",
    "validate_not_empty",
    "validate_pagination",
    "validate_positive",
    "validate_range",
    "validate_uuid",
]
