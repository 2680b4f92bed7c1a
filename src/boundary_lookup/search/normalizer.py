"""Text normalization for administrative name matching."""

import re
import unicodedata
from typing import Optional

_WHITESPACE = re.compile(r"\s+")


def normalize_text(text: Optional[str]) -> str:
    """
    Fold text into its matching form.

    Lower-cases, decomposes (NFKD) and drops combining marks, then collapses
    whitespace runs to single spaces and trims.

    Args:
        text: Input text string

    Returns:
        Normalized text ("" for None)
    """
    if not text:
        return ""

    text = unicodedata.normalize("NFKD", text.lower())
    text = "".join(c for c in text if not unicodedata.combining(c))
    return _WHITESPACE.sub(" ", text).strip()
