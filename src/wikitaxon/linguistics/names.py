# ABOUTME: Name heuristics: abbreviation detection, decoding and ASCII normalization
# ABOUTME: Uses unidecode for transliteration of titles into plain ASCII names

import html
import re
from urllib.parse import unquote

from unidecode import unidecode

UNKNOWN_CHARACTER = "[?]"

_ABBREVIATION = re.compile(r"^[A-Z0-9&./\-]*[A-Z][A-Z0-9&./\-]*[A-Z][A-Z0-9&./\-]*s?$")
_PERCENT_ESCAPE = re.compile(r"%[0-9A-Fa-f]{2}")


def is_abbreviation(word: str | None) -> bool:
    """True for acronyms such as "NGOs", "U.S." or "BBC"."""
    return bool(word) and _ABBREVIATION.match(word) is not None


def decode(text: str) -> str:
    """Resolve HTML entities and percent escapes."""
    text = html.unescape(text)
    if _PERCENT_ESCAPE.search(text):
        text = unquote(text)
    return text


def normalize(text: str) -> str:
    """Transliterate to ASCII; characters without transliteration become "[?]"."""
    return unidecode(text, errors="replace", replace_str=UNKNOWN_CHARACTER)
