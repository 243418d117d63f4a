from gadget_news.utils.common import (
    clean_text,
    format_iso_utc,
    parse_datetime_utc,
    short_hash,
    struct_time_to_utc,
    utc_now,
)

__all__ = [
    "clean_text",
    "format_iso_utc",
    "parse_datetime_utc",
    "short_hash",
    "struct_time_to_utc",
    "utc_now",
]
