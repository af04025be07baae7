"""Configuration model holding every declared prompt section."""

from dataclasses import dataclass, field
from typing import Any

from promptsmith.core.schema import schema_to_json
from promptsmith.core.types import (
    CONSTRAINT_TYPES,
    Constraint,
    ConstraintType,
    Example,
    PromptFormat,
    Tool,
)


@dataclass
class PromptConfig:
    """Mutable, ordered record of a prompt's sections.

    Owned by a single SystemPromptBuilder; all writes go through the builder
    so the render cache stays coherent.
    """

    identity: str | None = None
    context: str | None = None
    capabilities: list[str] = field(default_factory=list)
    tools: list[Tool] = field(default_factory=list)
    constraints: list[Constraint] = field(default_factory=list)
    examples: list[Example] = field(default_factory=list)
    error_handling: str | None = None
    guardrails_enabled: bool = False
    forbidden_topics: list[str] = field(default_factory=list)
    tone: str | None = None
    output_format: str | None = None
    format: PromptFormat = PromptFormat.MARKDOWN

    def is_empty(self) -> bool:
        """True when no section would be rendered."""
        return not (
            self.identity
            or self.context
            or self.capabilities
            or self.tools
            or self.constraints
            or self.examples
            or self.error_handling
            or self.guardrails_enabled
            or self.forbidden_topics
            or self.tone
            or self.output_format
        )

    def constraints_of(self, constraint_type: ConstraintType) -> list[Constraint]:
        """Constraints in one bucket, in insertion order."""
        return [c for c in self.constraints if c.type == constraint_type]

    def copy(self) -> "PromptConfig":
        """Independent copy; lists are duplicated, items are shared."""
        return PromptConfig(
            identity=self.identity,
            context=self.context,
            capabilities=list(self.capabilities),
            tools=list(self.tools),
            constraints=list(self.constraints),
            examples=list(self.examples),
            error_handling=self.error_handling,
            guardrails_enabled=self.guardrails_enabled,
            forbidden_topics=list(self.forbidden_topics),
            tone=self.tone,
            output_format=self.output_format,
            format=self.format,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain, JSON-serializable dictionary."""
        return {
            "identity": self.identity,
            "context": self.context,
            "capabilities": list(self.capabilities),
            "tools": [
                {
                    "name": tool.name,
                    "description": tool.description,
                    "parameters": schema_to_json(tool.schema),
                    "has_handler": tool.execute is not None,
                }
                for tool in self.tools
            ],
            "constraints": [c.to_dict() for c in self.constraints],
            "examples": [ex.to_dict() for ex in self.examples],
            "error_handling": self.error_handling,
            "guardrails_enabled": self.guardrails_enabled,
            "forbidden_topics": list(self.forbidden_topics),
            "tone": self.tone,
            "output_format": self.output_format,
            "format": self.format.value,
        }

    def summary(self) -> dict[str, Any]:
        """Counts per section and per constraint bucket."""
        return {
            "has_identity": bool(self.identity),
            "has_context": bool(self.context),
            "capabilities_count": len(self.capabilities),
            "tools_count": len(self.tools),
            "constraints_count": len(self.constraints),
            "constraints_by_type": {t: len(self.constraints_of(t)) for t in CONSTRAINT_TYPES},
            "examples_count": len(self.examples),
            "has_error_handling": bool(self.error_handling),
            "has_guardrails": self.guardrails_enabled,
            "forbidden_topics_count": len(self.forbidden_topics),
            "has_tone": bool(self.tone),
            "has_output_format": bool(self.output_format),
            "format": self.format.value,
        }
