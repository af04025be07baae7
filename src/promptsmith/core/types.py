"""Core value types for prompt configuration."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal

from promptsmith.core.exceptions import ConfigurationError

ConstraintType = Literal["must", "must_not", "should", "should_not"]

# Render order of constraint buckets
CONSTRAINT_TYPES: tuple[ConstraintType, ...] = ("must", "must_not", "should", "should_not")


class PromptFormat(str, Enum):
    """Text encodings a configuration can be rendered to."""

    MARKDOWN = "markdown"
    TOON = "toon"
    COMPACT = "compact"

    @classmethod
    def parse(cls, value: "PromptFormat | str") -> "PromptFormat":
        """Resolve a format name, raising ConfigurationError for unknown names."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as e:
            valid = ", ".join(f.value for f in cls)
            raise ConfigurationError(
                f"Unknown prompt format: {value!r} (expected one of: {valid})",
                key="format",
                reason="unknown_format",
            ) from e


@dataclass
class Tool:
    """A tool documented in the prompt.

    The schema may be a SchemaNode, a JSON Schema dict or a pydantic model class.
    The execute handler is opaque and passed through untouched.
    """

    name: str
    description: str
    schema: Any
    execute: Callable[..., Any] | None = None

    def __post_init__(self) -> None:
        """Validate tool definition."""
        if not self.name or not self.name.strip():
            raise ValueError("Tool name cannot be empty")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Tool":
        """Create tool from a mapping with name/description/schema/execute keys."""
        schema = data.get("schema", data.get("parameters"))
        return cls(
            name=data["name"],
            description=data.get("description", ""),
            schema=schema if schema is not None else {"type": "object", "properties": {}},
            execute=data.get("execute"),
        )


@dataclass(frozen=True)
class Constraint:
    """A behavioral rule placed in one of the four constraint buckets."""

    type: ConstraintType
    rule: str

    def __post_init__(self) -> None:
        """Validate constraint type."""
        if self.type not in CONSTRAINT_TYPES:
            raise ValueError(
                f"Constraint type must be one of {', '.join(CONSTRAINT_TYPES)}, got {self.type!r}"
            )

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for serialization."""
        return {"type": self.type, "rule": self.rule}


@dataclass(frozen=True)
class DialogueExample:
    """Example exchange written as a user message and an assistant reply."""

    user: str = ""
    assistant: str = ""
    explanation: str | None = None

    input_label = "User"
    output_label = "Assistant"

    @property
    def prompt_text(self) -> str:
        return self.user

    @property
    def response_text(self) -> str:
        return self.assistant

    def is_empty(self) -> bool:
        return not self.user.strip() and not self.assistant.strip()

    def fields(self) -> tuple[str, ...]:
        """Names of the populated fields, in render order."""
        names = [name for name in ("user", "assistant") if getattr(self, name).strip()]
        if self.explanation:
            names.append("explanation")
        return tuple(names)

    def to_dict(self) -> dict[str, str]:
        data = {"user": self.user, "assistant": self.assistant}
        if self.explanation:
            data["explanation"] = self.explanation
        return data


@dataclass(frozen=True)
class IOExample:
    """Example written as an input and the expected output."""

    input: str = ""
    output: str = ""
    explanation: str | None = None

    input_label = "Input"
    output_label = "Output"

    @property
    def prompt_text(self) -> str:
        return self.input

    @property
    def response_text(self) -> str:
        return self.output

    def is_empty(self) -> bool:
        return not self.input.strip() and not self.output.strip()

    def fields(self) -> tuple[str, ...]:
        """Names of the populated fields, in render order."""
        names = [name for name in ("input", "output") if getattr(self, name).strip()]
        if self.explanation:
            names.append("explanation")
        return tuple(names)

    def to_dict(self) -> dict[str, str]:
        data = {"input": self.input, "output": self.output}
        if self.explanation:
            data["explanation"] = self.explanation
        return data


Example = DialogueExample | IOExample


def example_from_dict(data: Mapping[str, Any]) -> Example:
    """Build an example from a mapping.

    ``user``/``assistant`` keys produce a DialogueExample, anything else is read
    as ``input``/``output``.
    """
    explanation = data.get("explanation") or None
    if data.get("user") or data.get("assistant"):
        return DialogueExample(
            user=data.get("user") or "",
            assistant=data.get("assistant") or "",
            explanation=explanation,
        )
    return IOExample(
        input=data.get("input") or "",
        output=data.get("output") or "",
        explanation=explanation,
    )
