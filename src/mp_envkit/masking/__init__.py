"""Log value redaction."""
from mp_envkit.masking.masker import (
    build_log_value,
    format_key,
    mask_userinfo,
    print_log_value,
    protected_keys_object,
    url_sanitize,
)
from mp_envkit.masking.rules import KEY_FORMATS, LOG_FORMATS, KeyFormat, LogFormat

__all__ = [
    "KEY_FORMATS",
    "LOG_FORMATS",
    "KeyFormat",
    "LogFormat",
    "build_log_value",
    "format_key",
    "mask_userinfo",
    "print_log_value",
    "protected_keys_object",
    "url_sanitize",
]
