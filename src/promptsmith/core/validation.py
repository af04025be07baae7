"""Static checks over a prompt configuration.

Findings are returned, never raised: errors must be fixed, warnings should be
fixed, info entries are recommendations.
"""

import re
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Literal

from promptsmith.core.model import PromptConfig

ValidationSeverity = Literal["error", "warning", "info"]

DUPLICATE_TOOL = "DUPLICATE_TOOL"
MISSING_IDENTITY = "MISSING_IDENTITY"
EMPTY_CAPABILITIES = "EMPTY_CAPABILITIES"
EMPTY_CONSTRAINTS = "EMPTY_CONSTRAINTS"
CONFLICTING_CONSTRAINTS = "CONFLICTING_CONSTRAINTS"
TOOLS_WITHOUT_EXAMPLES = "TOOLS_WITHOUT_EXAMPLES"
TOOLS_WITHOUT_GUARDRAILS = "TOOLS_WITHOUT_GUARDRAILS"
NO_MUST_CONSTRAINTS = "NO_MUST_CONSTRAINTS"

_NEGATION = re.compile(r"^(never|do not|don't|not|avoid)\s+")


@dataclass
class ValidationIssue:
    """A single validation finding."""

    severity: ValidationSeverity
    code: str
    message: str
    suggestion: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = {"code": self.code, "message": self.message, "severity": self.severity}
        if self.suggestion:
            data["suggestion"] = self.suggestion
        return data


@dataclass
class ValidationResult:
    """Validation report; ``valid`` is False whenever there is an error."""

    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)
    info: list[ValidationIssue] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def codes(self) -> set[str]:
        """All issue codes in the report."""
        return {issue.code for issue in (*self.errors, *self.warnings, *self.info)}

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": [issue.to_dict() for issue in self.errors],
            "warnings": [issue.to_dict() for issue in self.warnings],
            "info": [issue.to_dict() for issue in self.info],
        }


@dataclass(frozen=True)
class ValidatorConfig:
    """Switches for individual checks; every check is on by default."""

    check_duplicate_tools: bool = True
    check_identity: bool = True
    check_recommendations: bool = True
    check_constraint_conflicts: bool = True
    check_empty_sections: bool = True

    def to_dict(self) -> dict[str, bool]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ValidatorConfig":
        """Create config from dictionary, ignoring unknown keys."""
        valid_keys = {f.name for f in fields(cls)}
        return cls(**{k: bool(v) for k, v in data.items() if k in valid_keys})

    def with_overrides(
        self, overrides: "ValidatorConfig | Mapping[str, Any] | None"
    ) -> "ValidatorConfig":
        """Layer overrides on top of this config.

        A mapping only changes the keys it names; a ValidatorConfig replaces
        the whole config.
        """
        if overrides is None:
            return self
        if isinstance(overrides, ValidatorConfig):
            return overrides
        valid_keys = {f.name for f in fields(self)}
        return replace(self, **{k: bool(v) for k, v in overrides.items() if k in valid_keys})


class PromptValidator:
    """Runs the enabled checks against a PromptConfig."""

    def __init__(self, config: ValidatorConfig | Mapping[str, Any] | None = None) -> None:
        self.config = ValidatorConfig().with_overrides(config)

    def validate(self, prompt: PromptConfig) -> ValidationResult:
        """Validate a configuration.

        Args:
            prompt: Configuration to inspect (not modified)

        Returns:
            ValidationResult with errors, warnings and info findings
        """
        result = ValidationResult()

        if self.config.check_duplicate_tools:
            self._check_duplicate_tools(prompt, result)
        if self.config.check_identity:
            self._check_identity(prompt, result)
        if self.config.check_empty_sections:
            self._check_empty_sections(prompt, result)
        if self.config.check_recommendations:
            self._check_recommendations(prompt, result)
        if self.config.check_constraint_conflicts:
            self._check_constraint_conflicts(prompt, result)

        return result

    @staticmethod
    def _check_duplicate_tools(prompt: PromptConfig, result: ValidationResult) -> None:
        seen: set[str] = set()
        duplicates: list[str] = []
        for tool in prompt.tools:
            if tool.name in seen and tool.name not in duplicates:
                duplicates.append(tool.name)
            seen.add(tool.name)

        for name in duplicates:
            result.errors.append(
                ValidationIssue(
                    severity="error",
                    code=DUPLICATE_TOOL,
                    message=f'Duplicate tool name: "{name}"',
                    suggestion=f'Tool names must be unique. Rename one of the "{name}" tools.',
                )
            )

    @staticmethod
    def _check_identity(prompt: PromptConfig, result: ValidationResult) -> None:
        if not prompt.identity or not prompt.identity.strip():
            result.warnings.append(
                ValidationIssue(
                    severity="warning",
                    code=MISSING_IDENTITY,
                    message="No identity set",
                    suggestion="Add an identity with .with_identity() to define the agent's role",
                )
            )

    @staticmethod
    def _check_empty_sections(prompt: PromptConfig, result: ValidationResult) -> None:
        if not prompt.capabilities:
            result.warnings.append(
                ValidationIssue(
                    severity="warning",
                    code=EMPTY_CAPABILITIES,
                    message="No capabilities defined",
                    suggestion=(
                        "Add capabilities with .with_capability() or .with_capabilities() "
                        "to describe what the agent can do"
                    ),
                )
            )
        if not prompt.constraints:
            result.warnings.append(
                ValidationIssue(
                    severity="warning",
                    code=EMPTY_CONSTRAINTS,
                    message="No behavioral constraints defined",
                    suggestion="Add constraints with .with_constraint() to define behavioral guidelines",
                )
            )

    @staticmethod
    def _check_recommendations(prompt: PromptConfig, result: ValidationResult) -> None:
        if prompt.tools and not prompt.examples:
            result.info.append(
                ValidationIssue(
                    severity="info",
                    code=TOOLS_WITHOUT_EXAMPLES,
                    message="Tools defined without usage examples",
                    suggestion="Add examples with .with_examples() to demonstrate proper tool usage",
                )
            )
        if prompt.tools and not prompt.guardrails_enabled:
            result.info.append(
                ValidationIssue(
                    severity="info",
                    code=TOOLS_WITHOUT_GUARDRAILS,
                    message="Tools defined without security guardrails",
                    suggestion="Enable guardrails with .with_guardrails() to protect against prompt injection",
                )
            )
        if prompt.constraints and not prompt.constraints_of("must"):
            result.info.append(
                ValidationIssue(
                    severity="info",
                    code=NO_MUST_CONSTRAINTS,
                    message='No "must" constraints defined',
                    suggestion=(
                        'Add critical requirements with .with_constraint("must", "...") '
                        "for essential behavioral rules"
                    ),
                )
            )

    @staticmethod
    def _check_constraint_conflicts(prompt: PromptConfig, result: ValidationResult) -> None:
        # A "must" rule that a "must_not" rule forbids, ignoring a leading
        # negation word on the must_not side.
        musts = {_normalize_rule(c.rule, strip_negation=False) for c in prompt.constraints_of("must")}
        for constraint in prompt.constraints_of("must_not"):
            if _normalize_rule(constraint.rule) in musts:
                result.warnings.append(
                    ValidationIssue(
                        severity="warning",
                        code=CONFLICTING_CONSTRAINTS,
                        message=f'Conflicting constraints: "{constraint.rule}" is both required and forbidden',
                        suggestion=(
                            "Review your must/must_not constraints to ensure they don't "
                            "contradict each other"
                        ),
                    )
                )


def _normalize_rule(rule: str, strip_negation: bool = True) -> str:
    text = rule.strip().lower().rstrip(".!")
    return _NEGATION.sub("", text) if strip_negation else text


def format_validation_result(result: ValidationResult) -> str:
    """Render a validation report as readable text."""
    lines = ["✓ Validation passed" if result.valid else "✗ Validation failed"]

    for title, marker, issues in (
        ("Errors", "✗", result.errors),
        ("Warnings", "⚠", result.warnings),
        ("Info", "ℹ", result.info),
    ):
        if not issues:
            continue
        lines.append("")
        lines.append(f"{title} ({len(issues)}):")
        for issue in issues:
            lines.append(f"  {marker} [{issue.code}] {issue.message}")
            if issue.suggestion:
                lines.append(f"    → {issue.suggestion}")

    return "\n".join(lines)
