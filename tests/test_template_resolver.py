"""
Template resolution and tag extraction tests
"""
from chainweaver.core import (
    TAG_EXTRACTIONS,
    build_template_variables,
    extract_tag,
    extract_tagged_sections,
    resolve_template
)


TAGGED_OUTPUT = "intro <B_Edits>fix X</B_Edits> outro <B_Reasoning>because Y</B_Reasoning> end"


class TestTagExtraction:
    """<B_Edits> / <B_Reasoning> extraction"""

    def test_extracts_both_tags(self):
        assert extract_tag(TAGGED_OUTPUT, "B_Edits") == "fix X"
        assert extract_tag(TAGGED_OUTPUT, "B_Reasoning") == "because Y"

    def test_missing_tag_is_none(self):
        assert extract_tag("no tags here", "B_Edits") is None
        assert extract_tag("", "B_Edits") is None
        assert extract_tag(None, "B_Edits") is None

    def test_multiline_content_is_trimmed(self):
        text = "<B_Edits>\n  line one\nline two  \n</B_Edits>"
        assert extract_tag(text, "B_Edits") == "line one\nline two"

    def test_first_occurrence_wins(self):
        text = "<B_Edits>first</B_Edits><B_Edits>second</B_Edits>"
        assert extract_tag(text, "B_Edits") == "first"

    def test_unclosed_tag_is_absent(self):
        assert extract_tag("<B_Edits>never closed", "B_Edits") is None

    def test_sections_only_include_present_tags(self):
        assert extract_tagged_sections("<B_Reasoning>why</B_Reasoning>") == {"reasoning": "why"}
        assert extract_tagged_sections(TAGGED_OUTPUT) == {"edits": "fix X", "reasoning": "because Y"}

    def test_extraction_table(self):
        suffixes = {extraction.tag: extraction.suffix for extraction in TAG_EXTRACTIONS}
        assert suffixes == {"B_Edits": "edits", "B_Reasoning": "reasoning"}


class TestTemplateVariables:
    """Template variable set derived from the execution context"""

    def test_input_is_original_text(self):
        variables = build_template_variables("hello", {"input-1": "hello", "llm-1": "ECHO:hello"})
        assert variables["input"] == "hello"
        assert variables["llm-1"] == "ECHO:hello"
        assert variables["input-1"] == "hello"

    def test_derived_tag_entries(self):
        variables = build_template_variables("hello", {"llm-1": TAGGED_OUTPUT})
        assert variables["llm-1_edits"] == "fix X"
        assert variables["llm-1_reasoning"] == "because Y"

    def test_no_derived_entries_without_tags(self):
        variables = build_template_variables("hello", {"llm-1": "plain"})
        assert "llm-1_edits" not in variables
        assert "llm-1_reasoning" not in variables

    def test_input_cannot_be_shadowed_by_node_id(self):
        variables = build_template_variables("original", {"input": "something else"})
        assert variables["input"] == "original"

    def test_context_is_not_mutated(self):
        context = {"llm-1": TAGGED_OUTPUT}
        build_template_variables("hello", context)
        assert context == {"llm-1": TAGGED_OUTPUT}


class TestResolveTemplate:
    """{name} substitution"""

    def test_replaces_every_occurrence(self):
        assert resolve_template("{a} and {a}", {"a": "x"}) == "x and x"

    def test_unknown_name_passes_through(self):
        assert resolve_template("{unknown_name}", {"input": "hello"}) == "{unknown_name}"

    def test_tag_variable_resolves_exactly(self):
        variables = build_template_variables("hello", {"llm-1": TAGGED_OUTPUT})
        assert resolve_template("{llm-1_edits}", variables) == "fix X"

    def test_values_are_coerced_to_string(self):
        assert resolve_template("n={n}", {"n": 3}) == "n=3"

    def test_inserted_text_is_not_rescanned(self):
        assert resolve_template("{a}", {"a": "{b}", "b": "nope"}) == "{b}"

    def test_nested_braces_are_not_names(self):
        assert resolve_template("{{input}}", {"input": "x"}) == "{x}"

    def test_regex_characters_in_names(self):
        assert resolve_template("{node.1+}", {"node.1+": "ok"}) == "ok"
