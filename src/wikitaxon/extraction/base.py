# ABOUTME: Collaborator protocols and the error taxonomy of the category extraction
# ABOUTME: Expected absences are None values; only corpus I/O failures abort a run

from typing import Protocol


class LeafBranchClassifier(Protocol):
    """Maps a class identifier to one of the coarse taxonomy branches.

    A pure lookup that knows nothing about category classes.
    """

    def branch_of(self, class_id: str) -> str | None:
        """Return the branch of a class, or None if the class is unknown."""
        ...


class TitleEntityExtractor(Protocol):
    """Reads a page title from the corpus and maps it to an entity."""

    def get_title_entity(self, reader: "CorpusReaderLike") -> str | None: ...


class CorpusReaderLike(Protocol):
    def read_to_string(self, terminator: str, limit: int | None = None, ignore_case: bool = False) -> str | None: ...


class ExtractionError(Exception):
    """Base class for category extraction errors."""

    pass


class CorpusReadError(ExtractionError):
    """Raised when the corpus stream cannot be read. Aborts the run."""

    pass


class TemplateError(ExtractionError):
    """Raised when a fact template cannot be parsed."""

    pass


class ResourceError(ExtractionError):
    """Raised when the resources file is missing or invalid."""

    pass
