from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import ValidationError

Constraint = Literal["missing", "type", "enum", "length", "value"]
InvocationKind = Literal["transport", "overloaded", "malformed", "empty"]


@dataclass(frozen=True)
class FieldIssue:
    path: str
    constraint: Constraint
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"path": self.path, "constraint": self.constraint, "message": self.message}


def _classify_error_type(error_type: str) -> Constraint:
    if error_type == "missing":
        return "missing"
    if error_type in {"literal_error", "enum"}:
        return "enum"
    if error_type.startswith(("too_short", "too_long", "string_too_short", "string_too_long")):
        return "length"
    if error_type.endswith(("_type", "_parsing")) or error_type in {"model_attributes_type", "dict_type"}:
        return "type"
    return "value"


def describe_validation_error(exc: ValidationError) -> list[FieldIssue]:
    return describe_error_list(exc.errors())


def describe_error_list(errors: Sequence[Mapping[str, Any]]) -> list[FieldIssue]:
    """Accepts pydantic's `errors()` output, also exposed by FastAPI's RequestValidationError."""
    issues: list[FieldIssue] = []
    for error in errors:
        path = ".".join(str(part) for part in error.get("loc", ())) or "(root)"
        issues.append(
            FieldIssue(
                path=path,
                constraint=_classify_error_type(str(error.get("type", ""))),
                message=str(error.get("msg", "Invalid value")),
            )
        )
    return issues


class InvocationError(Exception):
    """Raised by the LLM client; `kind` tells callers whether a retry is sensible."""

    def __init__(self, kind: InvocationKind, message: str, *, retryable: bool | None = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        if retryable is None:
            retryable = kind in {"transport", "overloaded"}
        self.retryable = retryable


class FlowError(Exception):
    code = "flow_error"
    retryable = False

    def __init__(self, message: str, *, details: list[FieldIssue] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or []


class InvalidInput(FlowError):
    code = "invalid_input"

    @classmethod
    def from_validation_error(cls, flow_name: str, exc: ValidationError) -> InvalidInput:
        issues = describe_validation_error(exc)
        summary = "; ".join(f"{issue.path}: {issue.message}" for issue in issues[:3])
        return cls(f"Please check your input for {flow_name}. {summary}".strip(), details=issues)


class UpstreamUnavailable(FlowError):
    code = "upstream_unavailable"

    def __init__(self, message: str, *, retryable: bool = True):
        super().__init__(message)
        self.retryable = retryable


class MalformedOutput(FlowError):
    code = "malformed_output"


class GenerationFailed(FlowError):
    code = "generation_failed"


OVERLOADED_MESSAGE = (
    "The AI service is temporarily unavailable or overloaded. Please try again in a moment."
)
UNREACHABLE_MESSAGE = "The AI service could not be reached. Please try again later."
REJECTED_MESSAGE = "The AI service rejected the request. Please contact support if this keeps happening."
MALFORMED_MESSAGE = "The AI returned a response we couldn't understand. Please try again."


def upstream_error_from(error: InvocationError) -> FlowError:
    """Translate an adapter failure into the flow-level taxonomy."""
    if error.kind == "overloaded":
        return UpstreamUnavailable(OVERLOADED_MESSAGE, retryable=True)
    if error.kind == "transport":
        if error.retryable:
            return UpstreamUnavailable(UNREACHABLE_MESSAGE, retryable=True)
        return UpstreamUnavailable(REJECTED_MESSAGE, retryable=False)
    return MalformedOutput(MALFORMED_MESSAGE)
