# ABOUTME: Fact template engine: regex pattern rules whose matches instantiate fact templates
# ABOUTME: Templates use $0 for the subject, $1..$n for capture groups and #n for fact references

import re
from collections.abc import Iterable
from typing import Self

from pydantic import BaseModel, ConfigDict

from wikitaxon.extraction.base import TemplateError
from wikitaxon.facts.components import for_entity, is_entity
from wikitaxon.facts.models import Fact
from wikitaxon.utils.logging import get_logger

logger = get_logger(__name__)

_TOKEN = re.compile(r'"(?:[^"\\]|\\.)*"(?:@[\w\-$]+|\^\^\S+)?|<[^<>]*>|;|[^\s;]+')
_PLACEHOLDER = re.compile(r"\$\d+")
_FACT_REFERENCE = re.compile(r"^#\d+$")
_FACT_REFERENCE_DECLARATION = re.compile(r"^(#\d+):$")


class FactTemplate(BaseModel):
    """A fact with placeholders, e.g. `$0 <wasBornIn> <$1>`."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    subject: str
    relation: str
    object: str

    @classmethod
    def create(cls, templates: str) -> list["FactTemplate"]:
        """Parse a `;`-separated list of templates, each `[#n:] subject relation object`.

        Raises:
            TemplateError: If a template does not have exactly three components
        """
        result: list[FactTemplate] = []
        current: list[str] = []
        for token in [*_TOKEN.findall(templates), ";"]:
            if token != ";":
                current.append(token)
                continue
            if not current:
                continue
            template_id = None
            declaration = _FACT_REFERENCE_DECLARATION.match(current[0])
            if declaration:
                template_id = declaration.group(1)
                current = current[1:]
            if len(current) != 3:
                raise TemplateError(f"Expected 'subject relation object' in template: {' '.join(current)!r}")
            result.append(cls(id=template_id, subject=current[0], relation=current[1], object=current[2]))
            current = []
        return result

    def instantiate(self, variables: dict[str, str], references: dict[str, str] | None = None) -> Fact | None:
        """Fill in the placeholders. Returns None if a placeholder or reference is unbound."""
        references = references or {}
        components = []
        for component in (self.subject, self.relation, self.object):
            value = _substitute(component, variables, references)
            if value is None:
                logger.debug("Unbound placeholder in fact template", template=str(self), component=component)
                return None
            components.append(value)
        subject, relation, obj = components
        return Fact(subject=subject, relation=relation, object=obj)

    @staticmethod
    def instantiate_all(templates: Iterable["FactTemplate"], variables: dict[str, str]) -> list[Fact]:
        """Instantiate templates in order; `#n` references resolve to earlier facts of the same list."""
        references: dict[str, str] = {}
        result = []
        for template in templates:
            fact = template.instantiate(variables, references)
            if fact is None:
                continue
            if template.id is not None:
                fact = fact.with_id()
                references[template.id] = fact.id
            result.append(fact)
        return result

    def __str__(self) -> str:
        prefix = f"{self.id}: " if self.id else ""
        return f"{prefix}{self.subject} {self.relation} {self.object}"


def _substitute(component: str, variables: dict[str, str], references: dict[str, str]) -> str | None:
    if _FACT_REFERENCE.match(component):
        return references.get(component)
    literal = component.startswith('"')
    unbound = False

    def replace(match: re.Match[str]) -> str:
        nonlocal unbound
        value = variables.get(match.group(0))
        if value is None:
            unbound = True
            return ""
        if literal:
            return value.replace("\\", "\\\\").replace('"', '\\"')
        return value

    result = _PLACEHOLDER.sub(replace, component)
    if unbound:
        return None
    if is_entity(result):
        result = for_entity(result)
    return result


class PatternRule(BaseModel):
    """A compiled regular expression with the templates each of its matches instantiates."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    pattern: re.Pattern[str]
    templates: list[FactTemplate]

    @classmethod
    def compile(cls, pattern: str, templates: str) -> "PatternRule":
        try:
            compiled = re.compile(pattern)
        except re.error as e:
            raise TemplateError(f"Invalid pattern {pattern!r}: {e}") from e
        return cls(pattern=compiled, templates=FactTemplate.create(templates))


class FactTemplateExtractor:
    """Extracts facts from strings by matching every rule and instantiating its templates."""

    def __init__(self, rules: Iterable[PatternRule], name: str = "patterns"):
        self.name = name
        self.rules = list(rules)
        if not self.rules:
            logger.warning("No patterns found", rule_set=name)
        else:
            logger.debug("Loaded fact templates", rule_set=name, rules=len(self.rules))

    @classmethod
    def from_strings(cls, rules: Iterable[tuple[str, str]], name: str = "patterns") -> Self:
        """Build from `(pattern, templates)` pairs, skipping malformed rules with a warning."""
        compiled = []
        for pattern, templates in rules:
            try:
                compiled.append(PatternRule.compile(pattern, templates))
            except TemplateError as e:
                logger.warning("Skipping malformed rule", rule_set=name, pattern=pattern, error=str(e))
        return cls(compiled, name=name)

    def extract(self, string: str, dollar_zero: str) -> list[Fact]:
        """Facts for every match of every rule, in rule, match and template order."""
        result = []
        for rule in self.rules:
            for match in rule.pattern.finditer(string):
                variables = {"$0": dollar_zero}
                for i in range(1, (rule.pattern.groups or 0) + 1):
                    variables[f"${i}"] = match.group(i) or ""
                result.extend(FactTemplate.instantiate_all(rule.templates, variables))
        return result
