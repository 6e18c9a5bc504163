# ABOUTME: Single-pass streaming driver turning category links of a page dump into typed facts
# ABOUTME: Buffers the facts of the current page and flushes them through a branch-consistency gate

import re
from collections.abc import Callable, Collection, Mapping

from pydantic import BaseModel, Field

from wikitaxon.config import Config, get_config
from wikitaxon.extraction.base import LeafBranchClassifier, TitleEntityExtractor
from wikitaxon.extraction.branches import CategoryClassGraph, branch_of, dominant_branch
from wikitaxon.extraction.classifier import category_to_class
from wikitaxon.extraction.corpus import CorpusReader
from wikitaxon.extraction.resources import ExtractionResources
from wikitaxon.extraction.templates import FactTemplateExtractor
from wikitaxon.extraction.titles import names_of
from wikitaxon.facts.components import (
    RDF_TYPE,
    RDFS_LABEL,
    RDFS_SUBCLASS_OF,
    for_string_with_language,
    for_wiki_category,
    get_language,
    is_fact_id,
    wikipedia_url,
)
from wikitaxon.facts.models import Fact, FactBuffer, RelationKind
from wikitaxon.facts.sinks import Channel, FactSink
from wikitaxon.linguistics import NounGroup
from wikitaxon.utils.logging import get_logger, with_entity_context, with_operation_context

logger = get_logger(__name__)

TITLE_MARKER = "<title>"
LINK_MARKER = "[["
LINK_TERMINATORS = ("]", "|")
CATEGORY_PREFIX = "category:"

_LANGUAGE_CODE = re.compile(r"[a-z\-]+")


class ExtractionStats(BaseModel):
    """Counters of one extraction run."""

    pages: int = 0
    entities: int = 0
    categories: int = 0
    classified_categories: int = 0
    language_labels: int = 0
    skipped_links: int = 0
    types_kept: int = 0
    types_dropped: int = 0
    entities_discarded: int = 0
    facts_written: dict[str, int] = Field(default_factory=dict)


class CategoryExtractor:
    """Extracts types, classes and labels from the category links of a page dump.

    The corpus is scanned once. Facts of the current page are buffered and
    written when the next page starts, after checking that every `rdf:type`
    fact falls into the same taxonomy branch as the majority of the page's
    types. Pages whose types resolve to no branch produce no output at all.
    """

    def __init__(
        self,
        pattern_extractor: FactTemplateExtractor,
        nonconceptual: Collection[str],
        preferred_meanings: Mapping[str, str],
        title_extractor: TitleEntityExtractor,
        leaf_classifier: LeafBranchClassifier,
        english_language: str = "en",
        wikipedia_base_url: str = "http://en.wikipedia.org/wiki/",
        language_prefix_max_length: int = 8,
        link_text_limit: int = 1000,
    ):
        self.pattern_extractor = pattern_extractor
        self.nonconceptual = nonconceptual
        self.preferred_meanings = preferred_meanings
        self.title_extractor = title_extractor
        self.leaf_classifier = leaf_classifier
        self.english_language = english_language
        self.wikipedia_base_url = wikipedia_base_url
        self.language_prefix_max_length = language_prefix_max_length
        self.link_text_limit = link_text_limit

    @classmethod
    def from_resources(cls, resources: ExtractionResources, config: Config | None = None) -> "CategoryExtractor":
        config = config or get_config()
        return cls(
            pattern_extractor=resources.pattern_extractor(),
            nonconceptual=resources.nonconceptual_words,
            preferred_meanings=resources.preferred_meanings,
            title_extractor=resources.title_extractor(limit=config.link_text_limit),
            leaf_classifier=resources.branch_classifier(),
            english_language=config.english_language,
            wikipedia_base_url=config.wikipedia_base_url,
            language_prefix_max_length=config.language_prefix_max_length,
            link_text_limit=config.link_text_limit,
        )

    @with_operation_context("category_extraction")
    def extract(
        self,
        reader: CorpusReader,
        writers: Mapping[Channel, FactSink],
        progress: Callable[[], None] | None = None,
    ) -> ExtractionStats:
        """Scan the whole corpus and write the facts to the channel sinks.

        Args:
            reader: Corpus positioned at its start
            writers: One sink per output channel
            progress: Called once per page title

        Returns:
            Counters of the run

        Raises:
            CorpusReadError: If the corpus cannot be read
        """
        stats = ExtractionStats()
        graph = CategoryClassGraph()
        facts = FactBuffer()
        entity: str | None = None

        while True:
            marker = reader.find_ignore_case(TITLE_MARKER, LINK_MARKER)
            if marker == -1:
                self.flush(entity, facts, writers, graph, stats)
                for fact in graph:
                    channel = Channel.CATEGORY_SOURCES if is_fact_id(fact.subject) else Channel.CATEGORY_CLASSES
                    self._write(writers, channel, fact, stats)
                logger.info(
                    "Category extraction finished",
                    pages=stats.pages,
                    categories=stats.categories,
                    category_classes=len(graph),
                )
                return stats

            if marker == 0:
                stats.pages += 1
                if progress is not None:
                    progress()
                self.flush(entity, facts, writers, graph, stats)
                entity = self.title_extractor.get_title_entity(reader)
                if entity is not None:
                    stats.entities += 1
                    source = self._source(entity)
                    for name in names_of(entity, self.english_language):
                        facts.add(
                            Fact(subject=entity, relation=RDFS_LABEL, object=name),
                            source=source,
                            technique="CategoryExtractor from simple name heuristics",
                        )
                continue

            if entity is None:
                continue
            text = reader.read_to(*LINK_TERMINATORS, limit=self.link_text_limit)
            if text is None:
                logger.debug("Skipping unterminated link", entity=entity)
                stats.skipped_links += 1
                continue
            self.process_link(entity, text.strip(), facts, graph, stats)

    def process_link(
        self, entity: str, text: str, facts: FactBuffer, graph: CategoryClassGraph, stats: ExtractionStats
    ) -> None:
        """Buffer the facts of one link: a category link or an interlanguage link."""
        if text.lower().startswith(CATEGORY_PREFIX):
            category = text[len(CATEGORY_PREFIX) :].strip()
            stats.categories += 1
            source = self._source(entity)
            technique = f"CategoryExtractor from {category}"
            for fact in self.pattern_extractor.extract(category, entity):
                facts.add(fact, source=source, technique=technique)
            if self.extract_type(entity, category, facts, graph) is not None:
                stats.classified_categories += 1
            return

        colon = text.find(":")
        if 0 < colon < self.language_prefix_max_length and _LANGUAGE_CODE.fullmatch(text[:colon]):
            label = for_string_with_language(text[colon + 1 :], text[:colon])
            facts.add(Fact(subject=entity, relation=RDFS_LABEL, object=label))
            stats.language_labels += 1

    def extract_type(self, entity: str, category: str, facts: FactBuffer, graph: CategoryClassGraph) -> str | None:
        """Type the entity with the category class and connect that class to WordNet.

        Returns:
            The WordNet class of the category, or None if it has none
        """
        concept = category_to_class(category, self.nonconceptual, self.preferred_meanings)
        if concept is None:
            return None
        source = self._source(entity)
        technique = f"CategoryExtractor from {category}"
        category_class = for_wiki_category(category)
        facts.add(Fact(subject=entity, relation=RDF_TYPE, object=category_class), source=source, technique=technique)
        graph.add(
            Fact(subject=category_class, relation=RDFS_SUBCLASS_OF, object=concept), source=source, technique=technique
        )
        name = NounGroup(category).stemmed().replace("_", " ")
        if name:
            label = for_string_with_language(name, self.english_language)
            graph.add(
                Fact(subject=category_class, relation=RDFS_LABEL, object=label),
                source=source,
                technique="CategoryExtractor from stemmed name",
            )
        return concept

    def flush(
        self,
        entity: str | None,
        facts: FactBuffer,
        writers: Mapping[Channel, FactSink],
        graph: CategoryClassGraph,
        stats: ExtractionStats,
    ) -> None:
        """Write the buffered facts of an entity if its types agree on a branch, then clear the buffer."""
        if entity is None:
            facts.clear()
            return
        with with_entity_context(entity) as log:
            branch = dominant_branch(facts.get(entity, RDF_TYPE), graph, self.leaf_classifier)
            log.debug("Resolved branch of entity", branch=branch)
            if branch is None:
                stats.entities_discarded += 1
                facts.clear()
                return

            for fact in facts:
                kind = fact.kind
                if kind is RelationKind.TYPE:
                    fact_branch = branch_of(fact.object, graph, self.leaf_classifier)
                    if fact_branch != branch:
                        log.debug("Wrong branch", type=fact.object, branch=fact_branch, expected=branch)
                        stats.types_dropped += 1
                        continue
                    stats.types_kept += 1
                    self._write(writers, Channel.CATEGORY_TYPES, fact, stats)
                elif kind is RelationKind.LABEL:
                    if get_language(fact.object) == self.english_language:
                        self._write(writers, Channel.CATEGORY_FACTS_DIRTY, fact, stats)
                    else:
                        self._write(writers, Channel.MULTILINGUAL_LABELS, fact, stats)
                elif kind is RelationKind.SUBCLASS_OF:
                    self._write(writers, Channel.CATEGORY_CLASSES, fact, stats)
                elif is_fact_id(fact.subject):
                    self._write(writers, Channel.CATEGORY_SOURCES, fact, stats)
                else:
                    self._write(writers, Channel.CATEGORY_FACTS_DIRTY, fact, stats)
            facts.clear()

    def _source(self, entity: str) -> str:
        return wikipedia_url(entity, self.wikipedia_base_url)

    @staticmethod
    def _write(writers: Mapping[Channel, FactSink], channel: Channel, fact: Fact, stats: ExtractionStats) -> None:
        writers[channel].write(fact)
        stats.facts_written[channel.value] = stats.facts_written.get(channel.value, 0) + 1
