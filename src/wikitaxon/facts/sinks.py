# ABOUTME: Output channels and append-only fact sinks (in-memory and TSV files)
# ABOUTME: One sink per channel; facts are written one at a time in flush order

from collections.abc import Iterator
from contextlib import ExitStack, contextmanager
from enum import Enum
from pathlib import Path
from typing import Protocol, TextIO

from wikitaxon.facts.models import Fact


class Channel(str, Enum):
    """Typed output channels of the category extraction."""

    CATEGORY_TYPES = "categoryTypes"
    CATEGORY_CLASSES = "categoryClasses"
    CATEGORY_SOURCES = "categorySources"
    CATEGORY_FACTS_DIRTY = "categoryFactsDirty"
    MULTILINGUAL_LABELS = "yagoMultilingualInstanceLabels"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    Channel.CATEGORY_TYPES: "The rdf:type facts that connect Wikipedia instances to Wikipedia classes",
    Channel.CATEGORY_CLASSES: "Classes derived from the Wikipedia categories, linked to the WordNet leaves",
    Channel.CATEGORY_SOURCES: "The sources of category facts",
    Channel.CATEGORY_FACTS_DIRTY: "Facts derived from the categories, still to be type checked",
    Channel.MULTILINGUAL_LABELS: "Names for the Wikipedia instances in multiple languages",
}


class FactSink(Protocol):
    """Append-only destination for facts of one channel."""

    def write(self, fact: Fact) -> None: ...


class MemoryFactSink:
    """Sink keeping the written facts in a list."""

    def __init__(self) -> None:
        self.facts: list[Fact] = []

    def write(self, fact: Fact) -> None:
        self.facts.append(fact)

    def __len__(self) -> int:
        return len(self.facts)


class TsvFactWriter:
    """Sink writing one tab-separated fact per line: id, subject, relation, object."""

    def __init__(self, stream: TextIO, header: str | None = None):
        self.stream = stream
        self.count = 0
        if header:
            self.stream.write(f"# {header}\n")

    def write(self, fact: Fact) -> None:
        self.stream.write(fact.to_tsv() + "\n")
        self.count += 1


def memory_sinks() -> dict[Channel, MemoryFactSink]:
    return {channel: MemoryFactSink() for channel in Channel}


@contextmanager
def open_channel_writers(directory: Path, encoding: str = "utf-8") -> Iterator[dict[Channel, TsvFactWriter]]:
    """Open `<channel>.tsv` writers in a directory, closing all of them on exit."""
    directory.mkdir(parents=True, exist_ok=True)
    with ExitStack() as stack:
        writers = {}
        for channel in Channel:
            stream = stack.enter_context(open(directory / f"{channel.value}.tsv", "w", encoding=encoding))
            writers[channel] = TsvFactWriter(stream, header=channel.description)
        yield writers
