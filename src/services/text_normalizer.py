"""Text normalization for ingredient and unit matching.

All comparisons in the matcher run on the output of ``normalize``. Case folding
happens here, in Python, so the result never depends on the database collation
(a C-locale database lowercases A-Z but leaves Å/Ä/Ö untouched).
"""

import re
import unicodedata

MAX_QUERY_LENGTH = 200

PARENTHETICAL_RE = re.compile(r"\([^)]*\)")
WHITESPACE_RE = re.compile(r"\s+")


def fold_case(text: str | None) -> str:
    """Compose and case-fold text without any other cleanup.

    Examples:
    - "ÄGG" -> "ägg"
    - "Ägg" (decomposed) -> "ägg"
    """
    if not text:
        return ""
    return unicodedata.normalize("NFC", text).casefold()


def normalize(text: str | None) -> str:
    """Normalize free text for matching.

    Rules:
    - NFC compose, then case fold
    - Drop parenthetical modifiers: "Citron (finrivet skal)" -> "citron"
    - Collapse whitespace runs, trim, cap at 200 characters
    """
    folded = fold_case(text)
    if not folded:
        return ""
    folded = PARENTHETICAL_RE.sub(" ", folded)
    folded = WHITESPACE_RE.sub(" ", folded).strip()
    return folded[:MAX_QUERY_LENGTH].rstrip()
