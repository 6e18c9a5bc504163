# ABOUTME: English plural stemmer for category heads backed by the NLTK WordNet lemmatizer
# ABOUTME: Maps plural nouns to their singular form and decides whether a noun is singular

import functools

import nltk
from nltk.corpus import wordnet
from nltk.stem import WordNetLemmatizer

from wikitaxon.utils.logging import get_logger

logger = get_logger(__name__)

# Plurals whose WordNet lemma is not the singular used for class lookups
IRREGULAR = {"people": "person"}

# Words whose singular and plural forms coincide; they count as singular
SINGULAR_AND_PLURAL = frozenset(
    {
        "people",
        "species",
        "series",
        "sheep",
        "fish",
        "deer",
        "aircraft",
        "spacecraft",
        "offspring",
        "means",
        "headquarters",
        "crossroads",
        "barracks",
        "works",
    }
)

# Singular words that look like plurals; WordNet also knows a shorter noun for some of them
SINGULAR_WITH_S = frozenset({"news", "measles", "mumps", "billiards", "gallows"})

# Suffix rules for words WordNet does not know, e.g. "wikis"
_DETACHMENTS = (("ies", "y"), ("ches", "ch"), ("shes", "sh"), ("sses", "ss"), ("xes", "x"), ("s", ""))


@functools.cache
def _lemmatizer() -> WordNetLemmatizer:
    try:
        nltk.data.find("corpora/wordnet.zip")
    except LookupError:
        logger.info("Downloading NLTK WordNet corpus")
        nltk.download("wordnet", quiet=True)
    return WordNetLemmatizer()


@functools.lru_cache(maxsize=65536)
def _singular(noun: str) -> str:
    lemmatizer = _lemmatizer()
    if wordnet.synsets(noun, pos=wordnet.NOUN):
        # shortest WordNet lemma, so "taxis" gives "taxi"
        return lemmatizer.lemmatize(noun, pos=wordnet.NOUN)
    for suffix, ending in _DETACHMENTS:
        if noun.endswith(suffix) and len(noun) > len(suffix) + 1 and not noun.endswith(("ss", "us")):
            return noun[: -len(suffix)] + ending
    return noun


def _match_case(original: str, stem: str) -> str:
    if original.isupper() and len(original) > 1:
        return stem.upper()
    if original[:1].isupper():
        return stem[:1].upper() + stem[1:]
    return stem


def stem(word: str) -> str:
    """Return the singular form of a noun, or the word itself if it is not a plural."""
    if not word:
        return word
    s = word.lower()
    if s in IRREGULAR:
        return _match_case(word, IRREGULAR[s])
    if s in SINGULAR_AND_PLURAL or s in SINGULAR_WITH_S or s.endswith("ics"):
        return word
    singular = _singular(s)
    if singular == s:
        return word
    return _match_case(word, singular)


def is_plural(word: str) -> bool:
    s = word.lower()
    return s not in SINGULAR_AND_PLURAL and stem(s) != s


def is_singular(word: str) -> bool:
    return word.lower() in SINGULAR_AND_PLURAL or not is_plural(word)
