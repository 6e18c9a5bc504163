# ABOUTME: Shared fixtures: a small WordNet fragment, preferred meanings and a ready extractor
# ABOUTME: Used by the driver, resources and CLI tests

import io

import pytest

from wikitaxon.extraction import CategoryExtractor, CorpusReader, ExtractionResources
from wikitaxon.facts import memory_sinks

PERSON = "<wordnet_person_100007846>"
GEO = "<yagoGeoEntity>"
NOVELIST = "<wordnet_novelist_110363573>"
WRITER = "<wordnet_writer_110794014>"
CITIZEN = "<wordnet_citizen_109923673>"
CITY = "<wordnet_city_108524735>"


@pytest.fixture
def resources() -> ExtractionResources:
    return ExtractionResources(
        category_patterns=[
            {"pattern": r"^(\d+) births$", "template": '$0 <wasBornOnDate> "$1-##-##"^^xsd:date'},
            {"pattern": r"^People from (.+)$", "template": "$0 <livesIn> <$1>"},
        ],
        nonconceptual_words={"birth", "member"},
        preferred_meanings={
            "novelist": NOVELIST,
            "writer": WRITER,
            "citizen": CITIZEN,
            "citizen of france": CITIZEN,
            "person": PERSON,
            "city": CITY,
        },
        wordnet_superclasses={
            NOVELIST: [WRITER],
            WRITER: [PERSON],
            CITIZEN: [PERSON],
            CITY: [GEO],
        },
        branches=[PERSON, GEO],
    )


@pytest.fixture
def extractor(resources) -> CategoryExtractor:
    return CategoryExtractor.from_resources(resources)


@pytest.fixture
def run_corpus(extractor):
    """Run the extractor over a corpus string; returns (stats, sinks)."""

    def run(text: str, chunk_size: int = 64):
        sinks = memory_sinks()
        stats = extractor.extract(CorpusReader(io.StringIO(text), chunk_size=chunk_size), sinks)
        return stats, sinks

    return run
