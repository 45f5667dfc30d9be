"""Output file names for exported conversations. No PDF or HTML dependency."""

import re

from chat2pdf.nodes import RoleFilter

DEFAULT_SOURCE_KIND = "ChatGPT"
TITLE_MAX_LENGTH = 20

_UNSAFE_RE = re.compile(r"[^A-Za-z0-9]")


def sanitize_title(title: str, max_length: int = TITLE_MAX_LENGTH) -> str:
    """Cut title to max_length characters and replace everything but ASCII letters and digits with '_'."""
    return _UNSAFE_RE.sub("_", (title or "")[:max_length])


def build_filename(
    title: str,
    role_filter: RoleFilter | str,
    *,
    source_kind: str = DEFAULT_SOURCE_KIND,
    ext: str = "pdf",
) -> str:
    """'<source_kind>_<sanitized title>_<filter>.<ext>', e.g. ChatGPT_Trip_ideas_both.pdf."""
    role_filter = RoleFilter(role_filter)
    return f"{source_kind}_{sanitize_title(title)}_{role_filter.value}.{ext}"
