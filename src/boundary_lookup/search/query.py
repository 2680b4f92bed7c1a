"""Parsing of the ":level" query shorthand."""

from dataclasses import dataclass, field
from typing import List, Optional

from boundary_lookup.core.levels import AdminLevel

# Marks the start of a level keyword
LEVEL_PREFIX = ":"

LEVEL_KEYWORDS: List[str] = [level.keyword for level in AdminLevel.ordered()]


@dataclass
class ParsedQuery:
    """A search query split into level filter and free text."""

    raw: str
    text: str = ""
    level: Optional[AdminLevel] = None
    keyword: Optional[str] = None  # Text typed after ":", lower-cased
    suggestions: List[str] = field(default_factory=list)

    @property
    def has_prefix(self) -> bool:
        """Check if the query used the ":" shorthand."""
        return self.raw.strip().startswith(LEVEL_PREFIX)


def _split_prefix(raw: str):
    """Split ":keyword rest" into (keyword, rest)."""
    parts = raw.strip()[len(LEVEL_PREFIX) :].split(None, 1)
    keyword = parts[0].lower() if parts else None
    rest = parts[1].strip() if len(parts) > 1 else ""
    return keyword, rest


def parse_query(raw: Optional[str]) -> ParsedQuery:
    """
    Parse a search query.

    ":cell kigali" restricts to the Cell level and searches for "kigali".
    A partial or unknown keyword (":ce kig") yields keyword suggestions and
    no level filter; the remaining text is still searched. A bare ":"
    suggests every keyword.

    Args:
        raw: Query as typed

    Returns:
        ParsedQuery with level, text and suggestions
    """
    raw = raw or ""
    if not raw.strip().startswith(LEVEL_PREFIX):
        return ParsedQuery(raw=raw, text=raw)

    keyword, rest = _split_prefix(raw)
    if keyword is None:
        return ParsedQuery(raw=raw, suggestions=list(LEVEL_KEYWORDS))

    level = AdminLevel.from_keyword(keyword)
    if level is not None:
        return ParsedQuery(raw=raw, text=rest, level=level, keyword=keyword)

    return ParsedQuery(
        raw=raw,
        text=rest,
        keyword=keyword,
        suggestions=[k for k in LEVEL_KEYWORDS if k.startswith(keyword)],
    )


def complete_query(raw: str, keyword: str) -> str:
    """
    Replace the typed level keyword with a complete one, keeping the rest.

    >>> complete_query(":ce kig", "cell")
    ':cell kig'
    """
    rest = ""
    if raw.strip().startswith(LEVEL_PREFIX):
        _, rest = _split_prefix(raw)
    return f"{LEVEL_PREFIX}{keyword}" + (f" {rest}" if rest else "")
