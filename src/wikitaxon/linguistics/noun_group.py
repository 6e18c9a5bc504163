# ABOUTME: Shallow decomposition of an English noun phrase into modifiers and head
# ABOUTME: "French novelists of the 19th century" -> pre-modifier, head, preposition, post-modifier

from wikitaxon.linguistics.stemmer import stem

PREPOSITIONS = frozenset(
    {
        "about",
        "across",
        "after",
        "against",
        "along",
        "among",
        "around",
        "as",
        "at",
        "before",
        "behind",
        "below",
        "beneath",
        "beside",
        "between",
        "beyond",
        "by",
        "despite",
        "during",
        "for",
        "from",
        "in",
        "inside",
        "into",
        "near",
        "of",
        "on",
        "outside",
        "over",
        "per",
        "since",
        "through",
        "throughout",
        "to",
        "towards",
        "under",
        "until",
        "upon",
        "via",
        "with",
        "within",
        "without",
    }
)

DETERMINERS = frozenset({"the", "a", "an"})

_PUNCTUATION = ",;:!?"


class NounGroup:
    """A noun phrase split at its first preposition.

    The part before the preposition holds an optional determiner, the
    pre-modifier words and the head (its last word). The part after the
    preposition is parsed recursively as the post-modifier.
    """

    def __init__(self, text: str):
        self.original = text
        self.determiner: str | None = None
        self.pre_modifier: str | None = None
        self.head: str | None = None
        self.preposition: str | None = None
        self.post_modifier: NounGroup | None = None

        words = [word.strip(_PUNCTUATION) for word in text.split()]
        words = [word for word in words if word]

        split = next((i for i, word in enumerate(words) if word.lower() in PREPOSITIONS), len(words))
        if split < len(words):
            self.preposition = words[split]
            rest = words[split + 1 :]
            if rest:
                self.post_modifier = NounGroup(" ".join(rest))
        words = words[:split]

        if words and words[0].lower() in DETERMINERS:
            self.determiner = words.pop(0)
        if not words:
            return
        self.head = words[-1]
        if len(words) > 1:
            self.pre_modifier = " ".join(words[:-1])

    def stemmed(self) -> str:
        """The phrase with its head in singular form, e.g. "French novelist"."""
        if self.head is None:
            return ""
        parts = [self.pre_modifier, stem(self.head)]
        if self.preposition:
            parts.append(self.preposition)
            if self.post_modifier is not None:
                parts.append(self.post_modifier.original)
        return " ".join(part for part in parts if part)

    def __repr__(self) -> str:
        return (
            f"NounGroup(pre_modifier={self.pre_modifier!r}, head={self.head!r}, "
            f"preposition={self.preposition!r}, post_modifier={self.post_modifier!r})"
        )
