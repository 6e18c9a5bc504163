# ABOUTME: Page title handling: title element to entity component and trivial entity names
# ABOUTME: Non-article namespaces and titles blanked by replacement patterns yield no entity

import re
from collections.abc import Iterable

from wikitaxon.extraction.base import CorpusReaderLike
from wikitaxon.facts.components import for_entity, for_string_with_language
from wikitaxon.linguistics.names import UNKNOWN_CHARACTER, decode, normalize
from wikitaxon.utils.logging import get_logger

logger = get_logger(__name__)

NON_ARTICLE_NAMESPACES = frozenset(
    {
        "category",
        "draft",
        "file",
        "help",
        "image",
        "mediawiki",
        "module",
        "portal",
        "special",
        "talk",
        "template",
        "user",
        "wikipedia",
    }
)

TITLE_END = "</title>"


class TitleExtractor:
    """Reads the text of a `<title>` element and maps it to an entity."""

    def __init__(self, title_patterns: Iterable[tuple[str, str]] = (), limit: int = 1000):
        self.limit = limit
        self.replacements: list[tuple[re.Pattern[str], str]] = []
        for pattern, replacement in title_patterns:
            try:
                self.replacements.append((re.compile(pattern), replacement))
            except re.error as e:
                logger.warning("Skipping malformed title pattern", pattern=pattern, error=str(e))

    def get_title_entity(self, reader: CorpusReaderLike) -> str | None:
        """Consume the title up to `</title>` in any case and return its entity, or None."""
        title = reader.read_to_string(TITLE_END, limit=self.limit, ignore_case=True)
        if title is None:
            logger.debug("Unterminated title element")
            return None
        return self.title_to_entity(title)

    def title_to_entity(self, title: str) -> str | None:
        title = decode(title).strip()
        for pattern, replacement in self.replacements:
            title = pattern.sub(replacement, title).strip()
        if not title:
            return None
        if ":" in title:
            namespace = title.split(":", 1)[0].strip().lower()
            # "User talk", "Template talk", ...
            if namespace in NON_ARTICLE_NAMESPACES or namespace.endswith(" talk"):
                return None
        return for_entity(title[0].upper() + title[1:])


def names_of(entity: str, language: str = "en") -> list[str]:
    """Trivial names of an entity as language strings, e.g. "Paris" for <Paris_(France)>."""
    name = entity[1:-1] if entity.startswith("<") and entity.endswith(">") else entity
    name = decode(name.replace("_", " "))
    names = {name}
    normalized = normalize(name)
    if UNKNOWN_CHARACTER not in normalized:
        names.add(normalized)
    if " (" in name:
        names.add(name[: name.index(" (")].strip())
    if "," in name and "(" not in name:
        names.add(name[: name.index(",")].strip())
    return sorted(for_string_with_language(n, language) for n in names if n)
