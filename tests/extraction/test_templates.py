# ABOUTME: Tests for the fact template engine
# ABOUTME: Template parsing, placeholder substitution, fact references and pattern rules

import pytest
from structlog.testing import capture_logs

from wikitaxon.extraction import FactTemplate, FactTemplateExtractor, PatternRule, TemplateError
from wikitaxon.facts import Fact


class TestFactTemplateCreate:
    """Test parsing of template strings."""

    def test_single_template(self):
        """Test a template with three components."""
        (template,) = FactTemplate.create("$0 <wasBornIn> <$1>")
        assert (template.subject, template.relation, template.object) == ("$0", "<wasBornIn>", "<$1>")
        assert template.id is None

    def test_multiple_templates(self):
        """Test that templates are separated by semicolons."""
        templates = FactTemplate.create("$0 <wasBornIn> <$1>; $0 rdf:type <wordnet_person_100007846>")
        assert len(templates) == 2

    def test_literal_with_spaces_and_datatype(self):
        """Test that quoted literals stay one component."""
        (template,) = FactTemplate.create('$0 <hasMotto> "live and let live"@en')
        assert template.object == '"live and let live"@en'

    def test_fact_reference_declaration(self):
        """Test the `#n:` prefix that names a template's fact."""
        templates = FactTemplate.create("#1: $0 <isLeaderOf> <$1>; #1 <since> $2")
        assert templates[0].id == "#1"
        assert templates[1].subject == "#1"

    @pytest.mark.parametrize("text", ["$0 <wasBornIn>", "$0 <a> <b> <c>", "#1: $0 <a>"])
    def test_malformed_template(self, text):
        """Test that templates without three components are rejected."""
        with pytest.raises(TemplateError):
            FactTemplate.create(text)


class TestFactTemplateInstantiate:
    """Test filling in placeholders."""

    def test_entity_components_are_normalized(self):
        """Test that substituted entity components get underscores."""
        (template,) = FactTemplate.create("$0 <livesIn> <$1>")
        fact = template.instantiate({"$0": "<Foo>", "$1": "New York"})
        assert fact == Fact(subject="<Foo>", relation="<livesIn>", object="<New_York>")

    def test_literal_values_are_escaped(self):
        """Test that values substituted into literals are escaped."""
        (template,) = FactTemplate.create('$0 <hasMotto> "$1"')
        fact = template.instantiate({"$0": "<Foo>", "$1": 'say "hi"'})
        assert fact.object == '"say \\"hi\\""'

    def test_unbound_placeholder(self):
        """Test that a template with an unbound placeholder yields no fact."""
        (template,) = FactTemplate.create("$0 <livesIn> <$2>")
        assert template.instantiate({"$0": "<Foo>", "$1": "Paris"}) is None

    def test_relation_placeholder(self):
        """Test that the relation can be a placeholder too."""
        (template,) = FactTemplate.create("$0 <$1> <$2>")
        fact = template.instantiate({"$0": "<Foo>", "$1": "livesIn", "$2": "Paris"})
        assert fact.relation == "<livesIn>"

    def test_instantiate_all_resolves_references(self):
        """Test that `#n` refers to the id of an earlier fact."""
        templates = FactTemplate.create("#1: $0 <isLeaderOf> <$1>; #1 <since> $2")
        first, second = FactTemplate.instantiate_all(templates, {"$0": "<Foo>", "$1": "France", "$2": "1958"})

        assert first.id is not None
        assert second.subject == first.id
        assert second.object == "1958"

    def test_unresolved_reference(self):
        """Test that a reference to a skipped fact drops the referring fact."""
        templates = FactTemplate.create("#1: $0 <isLeaderOf> <$3>; #1 <since> $1")
        assert FactTemplate.instantiate_all(templates, {"$0": "<Foo>", "$1": "1958"}) == []


class TestFactTemplateExtractor:
    """Test pattern rules applied to category names."""

    @pytest.fixture
    def extractor(self):
        return FactTemplateExtractor.from_strings(
            [
                (r"^(\d+) births$", '$0 <wasBornOnDate> "$1-##-##"^^xsd:date'),
                (r"^People from (.+)$", "$0 <livesIn> <$1>; $0 <isCitizenOf> <$2>"),
            ]
        )

    def test_extract_matching_rule(self, extractor):
        """Test the facts of a matching rule."""
        facts = extractor.extract("1900 births", "<Foo>")
        assert facts == [Fact(subject="<Foo>", relation="<wasBornOnDate>", object='"1900-##-##"^^xsd:date')]

    def test_unbound_template_is_skipped(self, extractor):
        """Test that only the templates with bound placeholders produce facts."""
        facts = extractor.extract("People from New York", "<Foo>")
        assert facts == [Fact(subject="<Foo>", relation="<livesIn>", object="<New_York>")]

    def test_no_match(self, extractor):
        """Test that a string matching no rule yields nothing."""
        assert extractor.extract("French novelists", "<Foo>") == []

    def test_all_matches_are_used(self):
        """Test that every match of a pattern instantiates the templates."""
        extractor = FactTemplateExtractor.from_strings([(r"(\d{4})", "$0 <mentions> <$1>")])
        facts = extractor.extract("Films of 1990 and 1991", "<Foo>")
        assert [f.object for f in facts] == ["<1990>", "<1991>"]

    def test_unmatched_optional_group_binds_empty(self):
        """Test that an optional group that did not participate binds to the empty string."""
        extractor = FactTemplateExtractor.from_strings([(r"^Rivers( of)? (\w+)$", '$0 <flowsThrough> "$1$2"')])
        (fact,) = extractor.extract("Rivers France", "<Foo>")
        assert fact.object == '"France"'

    def test_output_is_bounded(self, extractor):
        """Test that a string yields at most matches times templates facts."""
        for text in ["1900 births", "People from Paris", "People from 1900 births"]:
            assert len(extractor.extract(text, "<Foo>")) <= 2

    def test_extract_is_pure(self, extractor):
        """Test that repeated calls give the same facts."""
        assert extractor.extract("1900 births", "<Foo>") == extractor.extract("1900 births", "<Foo>")

    def test_empty_rule_set_warns(self):
        """Test that an extractor without rules warns and extracts nothing."""
        with capture_logs() as logs:
            extractor = FactTemplateExtractor([], name="empty")

        assert any(log["event"] == "No patterns found" and log["log_level"] == "warning" for log in logs)
        assert extractor.extract("1900 births", "<Foo>") == []

    def test_malformed_rules_are_skipped(self):
        """Test that invalid patterns and templates are skipped with a warning."""
        with capture_logs() as logs:
            extractor = FactTemplateExtractor.from_strings(
                [("(unclosed", "$0 <a> <b>"), (r"^x$", "$0 <a>"), (r"^y$", "$0 <a> <b>")]
            )

        assert len(extractor.rules) == 1
        assert sum(log["event"] == "Skipping malformed rule" for log in logs) == 2

    def test_pattern_rule_compile(self):
        """Test compiling a single rule."""
        rule = PatternRule.compile(r"^(\w+) people$", "$0 <isCitizenOf> <$1>")
        assert rule.pattern.groups == 1
        assert len(rule.templates) == 1
