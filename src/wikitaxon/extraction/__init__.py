# ABOUTME: Category extraction: template engine, category classifier, branch resolver and driver
# ABOUTME: Pipeline: page dump -> category links -> buffered facts -> branch gate -> output channels

"""
Extraction Layer: facts from Wikipedia category links

This layer handles:
- Pattern rules that turn category names into facts (templates)
- Mapping category names to WordNet classes (classifier)
- Branch consistency of the types of a page (branches)
- The single-pass scan of the page dump (categories)

Data Flow: Corpus stream → Entity fact buffer → Branch gate → Output channels
"""

from wikitaxon.extraction.base import CorpusReadError, ExtractionError, ResourceError, TemplateError
from wikitaxon.extraction.branches import CategoryClassGraph, WordnetBranchClassifier, branch_of, dominant_branch
from wikitaxon.extraction.categories import CategoryExtractor, ExtractionStats
from wikitaxon.extraction.classifier import category_to_class
from wikitaxon.extraction.corpus import CorpusReader, open_corpus
from wikitaxon.extraction.resources import ExtractionResources
from wikitaxon.extraction.templates import FactTemplate, FactTemplateExtractor, PatternRule
from wikitaxon.extraction.titles import TitleExtractor, names_of

__all__ = [
    "CategoryClassGraph",
    "CategoryExtractor",
    "CorpusReadError",
    "CorpusReader",
    "ExtractionError",
    "ExtractionResources",
    "ExtractionStats",
    "FactTemplate",
    "FactTemplateExtractor",
    "PatternRule",
    "ResourceError",
    "TemplateError",
    "TitleExtractor",
    "WordnetBranchClassifier",
    "branch_of",
    "category_to_class",
    "dominant_branch",
    "names_of",
    "open_corpus",
]
