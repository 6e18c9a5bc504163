# ABOUTME: Helpers for the textual fact components used in the triple store
# ABOUTME: Builds and inspects entities, strings, language strings and reified fact ids

import re

RDF_TYPE = "rdf:type"
RDFS_LABEL = "rdfs:label"
RDFS_SUBCLASS_OF = "rdfs:subclassOf"
EXTRACTION_SOURCE = "<extractionSource>"
EXTRACTION_TECHNIQUE = "<extractionTechnique>"

FACT_ID_PREFIX = "<id_"

_LANGUAGE_STRING = re.compile(r'^"(?P<text>.*)"@(?P<language>[A-Za-z][A-Za-z\-]*)$', re.DOTALL)


def for_entity(name: str) -> str:
    """Return the entity component for a name: `French novelists` -> `<French_novelists>`."""
    name = name.strip()
    if name.startswith("<") and name.endswith(">"):
        name = name[1:-1]
    return "<" + name.replace(" ", "_") + ">"


def for_wiki_category(category: str) -> str:
    """Return the class component for a Wikipedia category name."""
    return for_entity("wikicategory_" + category.strip())


def for_string(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def for_string_with_language(text: str, language: str | None) -> str:
    if not language:
        return for_string(text)
    return for_string(text) + "@" + language


def for_uri(uri: str) -> str:
    return "<" + uri + ">"


def wikipedia_url(entity: str, base_url: str = "http://en.wikipedia.org/wiki/") -> str:
    """Return the Wikipedia URL component of an entity component."""
    name = entity[1:-1] if entity.startswith("<") and entity.endswith(">") else entity
    return for_uri(base_url + name)


def get_language(component: str) -> str | None:
    """Return the language tag of a language string, or None."""
    match = _LANGUAGE_STRING.match(component)
    return match.group("language") if match else None


def is_fact_id(component: str | None) -> bool:
    return bool(component) and component.startswith(FACT_ID_PREFIX)


def is_entity(component: str) -> bool:
    return component.startswith("<") and component.endswith(">")
