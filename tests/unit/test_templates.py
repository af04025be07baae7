"""Unit tests for built-in templates."""

from promptsmith.core.builder import SystemPromptBuilder
from promptsmith.core.schema import ObjectSchema
from promptsmith.core.types import Tool
from promptsmith.templates import (
    accessibility,
    coding_assistant,
    customer_service,
    data_analyst,
    multilingual,
    research_assistant,
    security,
)


class TestCustomerService:
    """Test the customer service template."""

    def test_basic(self):
        builder = customer_service(company_name="TechStore")
        prompt = builder.build()

        assert isinstance(builder, SystemPromptBuilder)
        assert "TechStore" in prompt
        assert builder.has_guardrails()
        assert builder.has_examples()
        assert builder.has_forbidden_topics()

    def test_optional_context(self):
        builder = customer_service(
            company_name="TechStore",
            support_email="help@techstore.example",
            business_hours="9-5 Mon-Fri",
            return_policy="30 days",
        )
        context = builder.to_dict()["context"]

        assert "Company: TechStore" in context
        assert "Business Hours: 9-5 Mon-Fri" in context
        assert "Return Policy: 30 days" in context
        assert "Escalation Email: help@techstore.example" in context

    def test_every_bucket_populated(self):
        by_type = customer_service(company_name="TechStore").get_summary()["constraints_by_type"]
        assert all(count > 0 for count in by_type.values())

    def test_validates(self):
        result = customer_service(company_name="TechStore").validate()
        assert result.valid is True
        assert result.warnings == []

    def test_returns_fresh_builders(self):
        first = customer_service(company_name="A")
        first.with_capability("Extra")
        second = customer_service(company_name="A")
        assert "Extra" not in second.build()


class TestCodingAssistant:
    """Test the coding assistant template."""

    def test_without_arguments(self):
        builder = coding_assistant()
        assert builder.has_identity()
        assert not builder.has_context()

    def test_context(self):
        builder = coding_assistant(
            languages=["Python", "Go"],
            frameworks=["FastAPI"],
            coding_style="PEP 8",
        )
        context = builder.to_dict()["context"]

        assert "Primary Languages: Python, Go" in context
        assert "Frameworks: FastAPI" in context
        assert "Coding Style Preferences: PEP 8" in context

    def test_extends_with_tools(self):
        builder = coding_assistant().with_tool(
            Tool(name="run_tests", description="Run the test suite", schema=ObjectSchema())
        )
        prompt = builder.build("toon")
        assert "Tools[1]:" in prompt
        assert "Constraints:" in prompt


class TestSecurity:
    """Test the security template."""

    def test_has_no_identity(self):
        builder = security()
        assert not builder.has_identity()
        assert builder.has_guardrails()
        assert builder.has_error_handling()

    def test_merge_into_role_template(self):
        base = customer_service(company_name="TechStore")
        identity = base.to_dict()["identity"]
        topics_before = base.get_summary()["forbidden_topics_count"]

        base.merge(security())

        assert base.to_dict()["identity"] == identity
        assert base.get_summary()["forbidden_topics_count"] > topics_before
        assert base.has_guardrails()


class TestDataAnalyst:
    """Test the data analyst template."""

    def test_without_arguments(self):
        builder = data_analyst()
        assert builder.has_identity()
        assert not builder.has_context()
        assert builder.validate().valid is True

    def test_context(self):
        builder = data_analyst(
            domain="E-commerce",
            visualization_tools=["Plotly", "Tableau"],
            data_sources=["PostgreSQL"],
        )
        assert builder.to_dict()["context"] == (
            "Domain Focus: E-commerce\n"
            "Visualization Tools: Plotly, Tableau\n"
            "Available Data Sources: PostgreSQL"
        )


class TestResearchAssistant:
    """Test the research assistant template."""

    def test_context(self):
        builder = research_assistant(field="Computer Science", citation_style="IEEE")
        context = builder.to_dict()["context"]

        assert "Research Field: Computer Science" in context
        assert "Citation Style: IEEE" in context
        assert "Academic Level" not in context

    def test_sections(self):
        summary = research_assistant().get_summary()
        assert summary["examples_count"] == 2
        assert summary["forbidden_topics_count"] == 3
        assert all(count > 0 for count in summary["constraints_by_type"].values())


class TestAccessibility:
    """Test the accessibility template."""

    def test_has_no_identity(self):
        builder = accessibility()
        assert not builder.has_identity()
        assert builder.has_output_format()

    def test_uses_input_output_examples(self):
        prompt = accessibility().build()
        assert "**Input:** Show me the chart" in prompt

    def test_merge_keeps_base_output_format(self):
        base = research_assistant()
        output_format = base.to_dict()["output_format"]

        base.merge(accessibility())

        assert base.to_dict()["output_format"] == output_format
        assert "Format content for optimal screen reader compatibility" in base.build()


class TestMultilingual:
    """Test the multilingual template."""

    def test_default_context(self):
        assert multilingual().to_dict()["context"] == "Default Language: English"

    def test_supported_languages(self):
        builder = multilingual(supported_languages=["English", "Spanish"], default_language="Spanish")
        assert builder.to_dict()["context"] == (
            "Supported Languages: English, Spanish\nDefault Language: Spanish"
        )
        rules = [c.rule for c in builder.get_constraints_by_type("must")]
        assert "If language cannot be detected, default to Spanish" in rules

    def test_without_auto_detect(self):
        with_detect = multilingual().get_constraints_by_type("must")
        without_detect = multilingual(auto_detect=False).get_constraints_by_type("must")
        assert len(with_detect) == len(without_detect) + 2

    def test_merge_appends_context(self):
        base = customer_service(company_name="TechStore").merge(multilingual())
        assert base.to_dict()["context"].endswith("\n\nDefault Language: English")


class TestAllTemplates:
    """Properties shared by every template."""

    def test_render_in_every_format(self):
        for factory in (
            accessibility,
            coding_assistant,
            data_analyst,
            multilingual,
            research_assistant,
            security,
        ):
            builder = factory()
            for fmt in ("markdown", "toon", "compact"):
                assert builder.build(fmt)
        assert customer_service(company_name="Acme").build("toon")
