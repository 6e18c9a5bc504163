# ABOUTME: Maps a Wikipedia category name to a WordNet class through its plural head
# ABOUTME: Rejecting guards first, then preferred-meaning lookups from most to least specific

from collections.abc import Collection, Mapping

from wikitaxon.linguistics import NounGroup, is_abbreviation, is_singular, stem
from wikitaxon.utils.logging import get_logger

logger = get_logger(__name__)


def category_to_class(
    category_name: str, nonconceptual: Collection[str], preferred_meanings: Mapping[str, str]
) -> str | None:
    """Return the WordNet class denoted by a category name, or None.

    "French novelists" maps to the meaning of "french novelist" or, failing
    that, of "novelist". Only plural heads denote classes, so "French
    novelist" is not classified. For "Naturalized citizens of France" the
    phrase "citizen of france" is tried before the bare head.

    Args:
        category_name: Category name without the "Category:" prefix
        nonconceptual: Stemmed heads that never denote a class
        preferred_meanings: Lower-case noun phrase -> class identifier

    Returns:
        The class identifier, or None if the category does not denote a class
    """
    category = NounGroup(category_name)
    if category.head is None:
        logger.debug("Could not find type in category", category=category_name, reason="empty head")
        return None

    if is_abbreviation(category.head):
        logger.debug("Could not find type in category", category=category_name, reason="abbreviation")
        return None

    category = NounGroup(category_name.lower())
    if category.head is None:
        return None

    if is_singular(category.head) and category.head != "people":
        logger.debug("Could not find type in category", category=category_name, reason="singular")
        return None

    stemmed_head = stem(category.head)
    if stemmed_head in nonconceptual:
        logger.debug("Could not find type in category", category=category_name, reason="non-conceptual")
        return None

    if category.pre_modifier is not None:
        words = category.pre_modifier.replace("_", " ").split()
        # longest pre-modifier first
        for start in range(len(words)):
            meaning = preferred_meanings.get(" ".join(words[start:]) + " " + stemmed_head)
            if meaning is not None:
                return meaning

    if category.post_modifier is not None and category.preposition == "of" and category.post_modifier.head:
        meaning = preferred_meanings.get(f"{stemmed_head} of {category.post_modifier.head}")
        if meaning is not None:
            return meaning

    meaning = preferred_meanings.get(stemmed_head)
    if meaning is not None:
        return meaning

    logger.debug("Could not find type in category", category=category_name, reason="no wordnet match")
    return None
