"""Unit tests for SystemPromptBuilder."""

import io
import json
from unittest.mock import patch

import pytest
from rich.console import Console

from promptsmith.core.builder import SystemPromptBuilder, create_prompt_builder
from promptsmith.core.config import PromptSmithConfig
from promptsmith.core.exceptions import ConfigurationError, DuplicateToolNameError
from promptsmith.core.schema import ObjectSchema, StringSchema
from promptsmith.core.types import DialogueExample, IOExample, PromptFormat, Tool


def make_tool(name="search", execute=None):
    return Tool(
        name=name,
        description="Search the web",
        schema=ObjectSchema({"query": StringSchema(description="The search query")}),
        execute=execute,
    )


class TestFactory:
    """Test create_prompt_builder()."""

    def test_returns_distinct_instances(self):
        """Each call returns a new, empty builder."""
        first = create_prompt_builder()
        second = create_prompt_builder()

        first.with_identity("Agent A")

        assert first is not second
        assert not second.has_identity()
        assert second.build() == ""

    def test_default_format_is_markdown(self):
        assert create_prompt_builder().get_format() == PromptFormat.MARKDOWN

    def test_config_sets_format(self):
        """Builder picks up the default format from a PromptSmithConfig."""
        builder = create_prompt_builder(PromptSmithConfig(default_format="toon"))
        assert builder.get_format() == PromptFormat.TOON


class TestSetters:
    """Test section setters and chaining."""

    def test_methods_return_same_builder(self):
        builder = SystemPromptBuilder()
        result = (
            builder.with_identity("You are helpful")
            .with_context("Context")
            .with_capability("Answer questions")
            .with_tool(make_tool())
            .with_constraint("must", "Be accurate")
            .with_examples([DialogueExample(user="Hi", assistant="Hello")])
            .with_error_handling("Ask for clarification")
            .with_guardrails()
            .with_forbidden_topics(["Politics"])
            .with_tone("Friendly")
            .with_output("Bullet points")
            .with_format("toon")
        )
        assert result is builder

    def test_blank_text_is_dropped(self):
        """Whitespace-only values leave the builder unchanged."""
        builder = (
            create_prompt_builder()
            .with_identity("   ")
            .with_context("")
            .with_capability("\n")
            .with_capabilities(["", "  "])
            .with_constraint("must", "  ")
            .with_error_handling("")
            .with_forbidden_topics(["", " "])
            .with_tone("\t")
            .with_output("")
        )

        assert builder.build() == ""
        summary = builder.get_summary()
        assert summary["capabilities_count"] == 0
        assert summary["constraints_count"] == 0
        assert summary["forbidden_topics_count"] == 0

    def test_capabilities_skip_blank_entries(self):
        builder = create_prompt_builder().with_capabilities(["Read", "", "  ", "Write"])
        assert builder.get_summary()["capabilities_count"] == 2

    def test_capabilities_accept_single_string(self):
        """A plain string is one capability, not one per character."""
        builder = create_prompt_builder().with_capabilities("Search")
        assert builder.get_summary()["capabilities_count"] == 1
        assert builder.build() == "# Capabilities\n1. Search"

    def test_forbidden_topics_accept_single_string(self):
        builder = create_prompt_builder().with_forbidden_topics("Politics")
        assert builder.get_summary()["forbidden_topics_count"] == 1
        assert "1. Politics" in builder.build()

    def test_identity_is_replaced(self):
        builder = create_prompt_builder().with_identity("First").with_identity("Second")
        prompt = builder.build()
        assert "Second" in prompt
        assert "First" not in prompt

    def test_invalid_constraint_type(self):
        with pytest.raises(ValueError, match="Constraint type must be one of"):
            create_prompt_builder().with_constraint("maybe", "Do something")

    def test_constraints_accept_single_string(self):
        builder = create_prompt_builder().with_constraints("should", "Be brief")
        assert [c.rule for c in builder.get_constraints_by_type("should")] == ["Be brief"]

    def test_forbidden_topics_are_deduplicated(self):
        builder = create_prompt_builder().with_forbidden_topics(["Politics", "Politics", "Religion"])
        builder.with_forbidden_topics(["Religion"])
        assert builder.get_summary()["forbidden_topics_count"] == 2

    def test_guardrails_enabled_twice(self):
        builder = create_prompt_builder().with_guardrails().with_guardrails()
        assert builder.has_guardrails()
        assert builder.build().count("# Security Guardrails") == 1

    def test_tool_from_mapping(self):
        """Mappings are converted to Tool instances."""
        builder = create_prompt_builder().with_tool(
            {
                "name": "lookup",
                "description": "Look up an order",
                "schema": {"type": "object", "properties": {"id": {"type": "string"}}},
            }
        )
        tools = builder.get_tools()
        assert len(tools) == 1
        assert isinstance(tools[0], Tool)
        assert tools[0].name == "lookup"

    def test_tool_with_empty_name(self):
        with pytest.raises(ValueError, match="Tool name cannot be empty"):
            create_prompt_builder().with_tool({"name": " ", "description": "x"})

    def test_examples_from_mappings(self):
        builder = create_prompt_builder().with_examples(
            [
                {"user": "Hi", "assistant": "Hello"},
                {"input": "2+2", "output": "4"},
                {"user": "", "assistant": ""},
            ]
        )
        summary = builder.get_summary()
        assert summary["examples_count"] == 2
        prompt = builder.build()
        assert "**User:** Hi" in prompt
        assert "**Input:** 2+2" in prompt

    def test_unknown_format(self):
        with pytest.raises(ConfigurationError) as exc_info:
            create_prompt_builder().with_format("xml")
        assert exc_info.value.key == "format"


class TestConditionalSetters:
    """Test the *_if variants."""

    def test_true_condition_applies(self):
        builder = (
            create_prompt_builder()
            .with_capability_if(True, "Search")
            .with_tool_if(True, make_tool())
            .with_constraint_if(True, "must", "Cite sources")
        )
        assert builder.has_capabilities()
        assert builder.has_tools()
        assert builder.has_constraints()

    def test_false_condition_is_noop(self):
        builder = create_prompt_builder()
        builder.build()

        result = (
            builder.with_capability_if(False, "Search")
            .with_tool_if(False, make_tool())
            .with_constraint_if(False, "must", "Cite sources")
        )

        assert result is builder
        assert not builder.has_capabilities()
        assert not builder.has_tools()
        assert not builder.has_constraints()


class TestQueries:
    """Test has_* queries, summaries and constraint lookups."""

    def test_has_queries_on_empty_builder(self):
        builder = create_prompt_builder()
        assert not builder.has_identity()
        assert not builder.has_context()
        assert not builder.has_capabilities()
        assert not builder.has_tools()
        assert not builder.has_constraints()
        assert not builder.has_examples()
        assert not builder.has_guardrails()
        assert not builder.has_forbidden_topics()
        assert not builder.has_error_handling()
        assert not builder.has_tone()
        assert not builder.has_output_format()

    def test_constraints_by_type_keeps_order(self):
        builder = (
            create_prompt_builder()
            .with_constraint("must", "First")
            .with_constraint("should", "Other")
            .with_constraint("must", "Second")
        )
        rules = [c.rule for c in builder.get_constraints_by_type("must")]
        assert rules == ["First", "Second"]
        assert builder.get_constraints_by_type("must_not") == []

    def test_summary(self):
        builder = (
            create_prompt_builder()
            .with_identity("Agent")
            .with_capabilities(["A", "B"])
            .with_tool(make_tool())
            .with_constraint("must", "x")
            .with_constraint("should_not", "y")
            .with_guardrails()
            .with_format("compact")
        )
        summary = builder.get_summary()

        assert summary["has_identity"] is True
        assert summary["has_context"] is False
        assert summary["capabilities_count"] == 2
        assert summary["tools_count"] == 1
        assert summary["constraints_count"] == 2
        assert summary["constraints_by_type"] == {
            "must": 1,
            "must_not": 0,
            "should": 0,
            "should_not": 1,
        }
        assert summary["has_guardrails"] is True
        assert summary["format"] == "compact"

    def test_get_tools_returns_copy(self):
        builder = create_prompt_builder().with_tool(make_tool())
        builder.get_tools().clear()
        assert builder.has_tools()


class TestBuildAndCache:
    """Test rendering and the render cache."""

    def test_empty_builder_renders_empty_string(self):
        builder = create_prompt_builder()
        assert builder.build() == ""
        assert builder.build("toon") == ""
        assert builder.build("compact") == ""

    def test_build_is_cached(self):
        builder = create_prompt_builder().with_identity("Agent")
        assert builder.get_cache_stats()["is_dirty"] is True

        first = builder.build()
        stats = builder.get_cache_stats()

        assert builder.build() == first
        assert stats["is_dirty"] is False
        assert stats["cached_formats"] == ["markdown"]
        assert stats["cache_size"] == len(first)

    def test_mutation_invalidates_cache(self):
        builder = create_prompt_builder().with_identity("Agent")
        before = builder.build()

        builder.with_capability("Search")

        assert builder.get_cache_stats()["is_dirty"] is True
        after = builder.build()
        assert after != before
        assert "Search" in after

    def test_build_format_override_keeps_default(self):
        builder = create_prompt_builder().with_identity("Agent")
        toon = builder.build("toon")
        assert toon.startswith("Identity:")
        assert builder.get_format() == PromptFormat.MARKDOWN
        assert builder.build().startswith("# Identity")

    def test_render_alias(self):
        builder = create_prompt_builder().with_identity("Agent")
        assert builder.render() == builder.build()

    def test_with_format_changes_default(self):
        builder = create_prompt_builder().with_identity("Agent").with_format(PromptFormat.TOON)
        assert builder.build() == "Identity:\n  Agent"

    def test_declaration_order_does_not_matter(self):
        first = (
            create_prompt_builder()
            .with_tone("Friendly")
            .with_capability("Search")
            .with_identity("Agent")
        )
        second = (
            create_prompt_builder()
            .with_identity("Agent")
            .with_capability("Search")
            .with_tone("Friendly")
        )
        assert first.build() == second.build()


class TestExport:
    """Test to_dict, to_json and runtime exports."""

    def test_runtime_config_text_matches_build(self):
        builder = create_prompt_builder().with_identity("Agent").with_tool(make_tool())
        runtime = builder.to_runtime_config()
        assert runtime["text"] == builder.build()
        assert set(runtime) == {"text", "tools"}

    def test_runtime_tools_pass_schema_and_handler_through(self):
        def handler(query):
            return query

        tool = make_tool(execute=handler)
        builder = create_prompt_builder().with_tool(tool).with_tool(make_tool("fetch"))
        runtime_tools = builder.to_runtime_tools()

        assert list(runtime_tools) == ["search", "fetch"]
        assert runtime_tools["search"]["description"] == "Search the web"
        assert runtime_tools["search"]["parameters"] is tool.schema
        assert runtime_tools["search"]["execute"] is handler
        assert runtime_tools["fetch"]["execute"] is None

    def test_runtime_tools_duplicate_names(self):
        """The last tool with a name wins and the collision is logged."""
        first = Tool(name="x", description="one", schema=ObjectSchema())
        second = Tool(name="x", description="two", schema=ObjectSchema())
        builder = create_prompt_builder().with_tools([first, second])

        with patch("promptsmith.core.builder.logger") as mock_logger:
            runtime_tools = builder.to_runtime_tools()

        assert list(runtime_tools) == ["x"]
        assert runtime_tools["x"]["description"] == "two"
        mock_logger.warn.assert_called_once_with("runtime_tool_name_collision", tool_name="x")

    def test_to_dict(self):
        builder = (
            create_prompt_builder()
            .with_identity("Agent")
            .with_tool(make_tool())
            .with_constraint("must", "Be kind")
            .with_examples([IOExample(input="a", output="b", explanation="why")])
        )
        data = builder.to_dict()

        assert set(data) == {
            "identity",
            "context",
            "capabilities",
            "tools",
            "constraints",
            "examples",
            "error_handling",
            "guardrails_enabled",
            "forbidden_topics",
            "tone",
            "output_format",
            "format",
        }
        assert data["identity"] == "Agent"
        assert data["constraints"] == [{"type": "must", "rule": "Be kind"}]
        assert data["examples"] == [{"input": "a", "output": "b", "explanation": "why"}]
        assert data["tools"][0]["parameters"] == {
            "type": "object",
            "properties": {"query": {"type": "string", "description": "The search query"}},
            "required": ["query"],
        }
        assert data["tools"][0]["has_handler"] is False
        assert data["format"] == "markdown"

    def test_to_json(self):
        builder = create_prompt_builder().with_identity("Agent").with_tool(make_tool())
        assert json.loads(builder.to_json()) == builder.to_dict()


class TestComposition:
    """Test extend, derive_child and merge."""

    def test_extend_copies_everything(self):
        parent = (
            create_prompt_builder()
            .with_identity("Agent")
            .with_capability("Search")
            .with_format("toon")
        )
        child = parent.extend()

        assert child is not parent
        assert child.build() == parent.build()
        assert child.get_format() == PromptFormat.TOON

    def test_extend_is_independent(self):
        parent = create_prompt_builder().with_capability("Search")
        child = parent.extend().with_capability("Summarize")

        assert parent.get_summary()["capabilities_count"] == 1
        assert child.get_summary()["capabilities_count"] == 2

    def test_derive_child_copies_only_format(self):
        parent = create_prompt_builder().with_identity("Agent").with_format("compact")
        child = parent.derive_child()

        assert child.get_format() == PromptFormat.COMPACT
        assert not child.has_identity()
        assert child.build() == ""

    def test_merge(self):
        base = create_prompt_builder().with_identity("Base").with_capability("A")
        source = create_prompt_builder().with_identity("Source").with_capabilities(["A", "B"])

        result = base.merge(source)

        assert result is base
        prompt = base.build()
        assert "Base" in prompt
        assert "Source" not in prompt
        assert base.get_summary()["capabilities_count"] == 2

    def test_merge_invalidates_cache(self):
        base = create_prompt_builder().with_identity("Base")
        base.build()
        base.merge(create_prompt_builder().with_capability("Search"))
        assert base.get_cache_stats()["is_dirty"] is True

    def test_merge_conflict_leaves_builder_unchanged(self):
        base = create_prompt_builder().with_tool(make_tool()).with_capability("A")
        source = create_prompt_builder().with_tool(make_tool()).with_capability("B")
        before = base.to_dict()

        with pytest.raises(DuplicateToolNameError) as exc_info:
            base.merge(source)

        assert exc_info.value.tool_name == "search"
        assert base.to_dict() == before


class TestDebug:
    """Test debug() output."""

    def test_debug_prints_summary(self):
        output = io.StringIO()
        console = Console(file=output, width=120)
        builder = create_prompt_builder().with_identity("Agent").with_tool(make_tool())

        result = builder.debug(console=console)

        text = output.getvalue()
        assert result is builder
        assert "tools_count" in text
        assert "cache_dirty" in text

    @patch("promptsmith.core.builder.TokenCounter.count_formats")
    def test_debug_with_tokens(self, mock_count_formats):
        mock_count_formats.return_value = {"markdown": 12, "toon": 9, "compact": 11}
        output = io.StringIO()
        builder = create_prompt_builder().with_identity("Agent")

        builder.debug(console=Console(file=output, width=120), show_tokens=True)

        text = output.getvalue()
        assert "tokens_markdown" in text
        assert "tokens_toon" in text
        mock_count_formats.assert_called_once()
