# ABOUTME: Precomputed collaborator data for one extraction run, loaded from a JSON file
# ABOUTME: Category patterns, non-conceptual words, preferred meanings and the WordNet hierarchy

from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from wikitaxon.extraction.base import ResourceError
from wikitaxon.extraction.branches import DEFAULT_BRANCHES, WordnetBranchClassifier
from wikitaxon.extraction.templates import FactTemplateExtractor
from wikitaxon.extraction.titles import TitleExtractor


class CategoryPattern(BaseModel):
    """A regular expression over category names and the fact templates it produces."""

    pattern: str = Field(..., description="Regular expression matched against the category name")
    template: str = Field(..., description="Fact templates separated by ';', e.g. '$0 <wasBornIn> <$1>'")


class TitlePattern(BaseModel):
    pattern: str
    replacement: str = ""


class ExtractionResources(BaseModel):
    """Read-only inputs of the category extraction."""

    category_patterns: list[CategoryPattern] = Field(default_factory=list)
    nonconceptual_words: set[str] = Field(
        default_factory=set, description="Stemmed heads that never denote a class, e.g. 'member'"
    )
    preferred_meanings: dict[str, str] = Field(
        default_factory=dict, description="Lower-case noun phrase -> WordNet class"
    )
    title_patterns: list[TitlePattern] = Field(
        default_factory=list, description="Replacements applied to titles; a title replaced by '' is skipped"
    )
    wordnet_superclasses: dict[str, list[str]] = Field(
        default_factory=dict, description="WordNet class -> its direct superclasses"
    )
    branches: list[str] = Field(default_factory=lambda: list(DEFAULT_BRANCHES))

    @classmethod
    def load(cls, path: Path) -> "ExtractionResources":
        """Load resources from a JSON file.

        Raises:
            ResourceError: If the file cannot be read or does not validate
        """
        try:
            return cls.model_validate_json(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise ResourceError(f"Cannot read resources file {path}: {e}") from e
        except ValidationError as e:
            raise ResourceError(f"Invalid resources file {path}: {e}") from e

    def pattern_extractor(self) -> FactTemplateExtractor:
        return FactTemplateExtractor.from_strings(
            ((p.pattern, p.template) for p in self.category_patterns), name="category patterns"
        )

    def title_extractor(self, limit: int = 1000) -> TitleExtractor:
        return TitleExtractor(((p.pattern, p.replacement) for p in self.title_patterns), limit=limit)

    def branch_classifier(self) -> WordnetBranchClassifier:
        return WordnetBranchClassifier(self.wordnet_superclasses, self.branches)
