# ABOUTME: Immutable fact model and the insertion-ordered fact buffer
# ABOUTME: Facts are triples with an optional reified id; provenance is kept as meta-facts

import base64
import hashlib
from collections.abc import Iterable, Iterator
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from wikitaxon.facts.components import (
    EXTRACTION_SOURCE,
    EXTRACTION_TECHNIQUE,
    FACT_ID_PREFIX,
    RDF_TYPE,
    RDFS_LABEL,
    RDFS_SUBCLASS_OF,
    for_string,
)


class RelationKind(str, Enum):
    """Closed set of relation kinds used to route facts on flush."""

    TYPE = "type"
    LABEL = "label"
    SUBCLASS_OF = "subclass_of"
    OTHER = "other"

    @classmethod
    def of(cls, relation: str) -> "RelationKind":
        return _RELATION_KINDS.get(relation, cls.OTHER)


_RELATION_KINDS = {
    RDF_TYPE: RelationKind.TYPE,
    RDFS_LABEL: RelationKind.LABEL,
    RDFS_SUBCLASS_OF: RelationKind.SUBCLASS_OF,
}


class Fact(BaseModel):
    """A statement `subject relation object`, optionally identified by a reified id."""

    model_config = ConfigDict(frozen=True)

    subject: str = Field(description="First argument of the fact")
    relation: str = Field(description="Relation component, e.g. rdf:type")
    object: str = Field(description="Second argument of the fact")
    id: str | None = Field(default=None, description="Reified fact id, set only when another fact refers to this one")

    @property
    def kind(self) -> RelationKind:
        return RelationKind.of(self.relation)

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.subject, self.relation, self.object)

    def make_id(self) -> str:
        """Deterministic id derived from the triple."""
        digest = hashlib.md5("\t".join(self.key).encode("utf-8")).digest()
        return FACT_ID_PREFIX + base64.b32encode(digest[:10]).decode("ascii").lower().rstrip("=") + ">"

    def with_id(self) -> "Fact":
        if self.id is not None:
            return self
        return self.model_copy(update={"id": self.make_id()})

    def provenance_facts(self, source: str | None, technique: str | None) -> list["Fact"]:
        """Meta-facts attaching a source URL and an extraction technique to this (reified) fact."""
        if self.id is None:
            raise ValueError("Only reified facts can carry provenance")
        result = []
        if source:
            result.append(Fact(subject=self.id, relation=EXTRACTION_SOURCE, object=source))
        if technique:
            result.append(Fact(subject=self.id, relation=EXTRACTION_TECHNIQUE, object=for_string(technique)))
        return result

    def to_tsv(self) -> str:
        return "\t".join((self.id or "", self.subject, self.relation, self.object))

    def __str__(self) -> str:
        prefix = f"{self.id} " if self.id else ""
        return f"{prefix}{self.subject} {self.relation} {self.object}"


class FactBuffer:
    """Insertion-ordered collection of facts that ignores exact duplicates."""

    def __init__(self, facts: Iterable[Fact] | None = None):
        self._facts: dict[tuple[str | None, str, str, str], Fact] = {}
        for fact in facts or ():
            self.add(fact)

    def add(self, fact: Fact, source: str | None = None, technique: str | None = None) -> bool:
        """Add a fact. With a source or technique the fact is reified and its provenance is added too.

        Provenance is only recorded the first time a fact is added.

        Returns:
            True if the fact was not in the buffer yet
        """
        if source or technique:
            fact = fact.with_id()
        is_new = self._put(fact)
        if is_new and (source or technique):
            for meta in fact.provenance_facts(source, technique):
                self._put(meta)
        return is_new

    def _put(self, fact: Fact) -> bool:
        key = (fact.id, *fact.key)
        if key in self._facts:
            return False
        self._facts[key] = fact
        return True

    def get(self, subject: str | None = None, relation: str | None = None) -> list[Fact]:
        return [
            fact
            for fact in self._facts.values()
            if (subject is None or fact.subject == subject) and (relation is None or fact.relation == relation)
        ]

    def clear(self) -> None:
        self._facts.clear()

    def __iter__(self) -> Iterator[Fact]:
        return iter(list(self._facts.values()))

    def __len__(self) -> int:
        return len(self._facts)

    def __contains__(self, fact: object) -> bool:
        return isinstance(fact, Fact) and (fact.id, *fact.key) in self._facts
