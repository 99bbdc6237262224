"""Text processing utilities."""

import re

from qrhunt.core.constants import MAX_SLUG_LENGTH, SLUG_PATTERN


# Operators recognised by the PostgREST filter grammar. Text shaped like
# ".eq." can smuggle an extra comparison into a filter expression string.
FILTER_OPERATORS: tuple[str, ...] = (
    "eq",
    "neq",
    "gt",
    "gte",
    "lt",
    "lte",
    "like",
    "ilike",
    "is",
    "in",
    "cs",
    "cd",
    "sl",
    "sr",
    "nxl",
    "nxr",
    "adj",
    "ov",
    "fts",
    "plfts",
    "phfts",
    "wfts",
    "not",
    "and",
    "or",
)

_OPERATOR_RE = re.compile(
    r"\.(" + "|".join(FILTER_OPERATORS) + r")\.",
    re.IGNORECASE,
)
_SLUG_RE = re.compile(SLUG_PATTERN)


def _strip_filter_syntax(text: str) -> str:
    text = text.replace("\\", "")
    text = re.sub(r"[()]", "", text)
    text = text.replace(",", "")
    text = _OPERATOR_RE.sub("", text)
    text = text.replace("%", "")
    return text.strip()


def sanitize_search_text(text: str | None) -> str:
    """Strip filter-grammar syntax from free search text.

    Removes backslashes, parentheses, commas, ``.<operator>.`` sequences
    and percent signs, then trims whitespace. Passes repeat until the text
    stops changing, since one removal can join the pieces of another
    (``".e%q."`` becomes ``".eq."`` once the percent sign is gone).

    This guards filter-expression strings, not SQL: values still go to the
    database as bound parameters.

    Args:
        text: Raw user input

    Returns:
        Sanitized text, or an empty string for empty input

    Examples:
        >>> sanitize_search_text("test),full_name.eq.admin")
        'testfull_nameadmin'
        >>> sanitize_search_text("  50% off ")
        '50 off'
    """
    if not text:
        return ""

    previous = None
    sanitized = text
    while sanitized != previous:
        previous = sanitized
        sanitized = _strip_filter_syntax(sanitized)
    return sanitized


def is_valid_slug(slug: str) -> bool:
    """Check a tenant slug: lowercase alphanumeric words joined by single hyphens."""
    return len(slug) <= MAX_SLUG_LENGTH and _SLUG_RE.fullmatch(slug) is not None


def generate_slug(name: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Generate a URL-safe slug from a name.

    Examples:
        >>> generate_slug("Springs Park North")
        'springs-park-north'
    """
    slug = name.lower().strip()
    slug = re.sub(r"[^a-z0-9\s-]", "", slug)
    slug = re.sub(r"[-\s]+", "-", slug)
    return slug[:max_length].strip("-")
