# ABOUTME: Branch resolution for classes and entities over the accumulating category class graph
# ABOUTME: WordNet leaf classifier, per-class branch lookup and majority vote per entity

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence

from wikitaxon.extraction.base import LeafBranchClassifier
from wikitaxon.facts.components import RDF_TYPE, RDFS_SUBCLASS_OF
from wikitaxon.facts.models import Fact, FactBuffer

# Coarse taxonomy roots, in order of preference
DEFAULT_BRANCHES = (
    "<wordnet_person_100007846>",
    "<wordnet_organization_108008335>",
    "<wordnet_building_102913152>",
    "<yagoGeoEntity>",
    "<wordnet_artifact_100021939>",
    "<wordnet_abstraction_100002137>",
    "<wordnet_physical_entity_100001930>",
)


class CategoryClassGraph(FactBuffer):
    """Facts about category classes collected during one extraction run.

    Holds the `rdfs:subclassOf` edges from category classes to WordNet classes
    (and the category labels). Grows monotonically; nothing is ever removed.
    """

    def __init__(self, facts: Iterable[Fact] | None = None):
        self._superclasses: dict[str, list[str]] = {}
        super().__init__(facts)

    def _put(self, fact: Fact) -> bool:
        is_new = super()._put(fact)
        if is_new and fact.relation == RDFS_SUBCLASS_OF:
            self._superclasses.setdefault(fact.subject, []).append(fact.object)
        return is_new

    def superclasses(self, class_id: str) -> list[str]:
        return self._superclasses.get(class_id, [])

    def clear(self) -> None:
        raise TypeError("The category class graph only grows during a run")


class WordnetBranchClassifier:
    """Leaf classifier walking up the WordNet hierarchy until it meets a branch root."""

    def __init__(self, superclasses: Mapping[str, Sequence[str]], branches: Sequence[str] = DEFAULT_BRANCHES):
        self.superclasses = superclasses
        self.branches = tuple(branches)
        self._rank = {branch: i for i, branch in enumerate(self.branches)}
        self._cache: dict[str, str | None] = {}

    def branch_of(self, class_id: str) -> str | None:
        if class_id not in self._cache:
            self._cache[class_id] = self._search(class_id)
        return self._cache[class_id]

    def _search(self, class_id: str) -> str | None:
        seen = {class_id}
        level = [class_id]
        while level:
            found = [c for c in level if c in self._rank]
            if found:
                return min(found, key=self._rank.__getitem__)
            following = []
            for current in level:
                for parent in self.superclasses.get(current, ()):
                    if parent not in seen:
                        seen.add(parent)
                        following.append(parent)
            level = following
        return None


def branch_of(class_id: str, graph: CategoryClassGraph, leaf_classifier: LeafBranchClassifier) -> str | None:
    """Branch of a class, asking the leaf classifier first and then for its category superclasses."""
    branch = leaf_classifier.branch_of(class_id)
    if branch is not None:
        return branch
    for superclass in graph.superclasses(class_id):
        branch = leaf_classifier.branch_of(superclass)
        if branch is not None:
            return branch
    return None


def dominant_branch(
    type_facts: Iterable[Fact], graph: CategoryClassGraph, leaf_classifier: LeafBranchClassifier
) -> str | None:
    """Majority branch over the `rdf:type` facts of an entity.

    Ties go to the lexicographically smallest branch. Returns None if no type
    resolves to a branch.
    """
    tally: Counter[str] = Counter()
    for fact in type_facts:
        if fact.relation != RDF_TYPE:
            continue
        branch = branch_of(fact.object, graph, leaf_classifier)
        if branch is not None:
            tally[branch] += 1
    best = None
    for branch in sorted(tally):
        if best is None or tally[branch] > tally[best]:
            best = branch
    return best
