from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import TypeVar

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT")

CHOICE_TYPES = {
    "multiple_choice",
    "assertion_reason",
    "mcq",
    "theory_mcq",
    "case_based_mcq",
    "passage_based_mcq",
}
TRUE_FALSE_OPTIONS = ["True", "False"]


def check_question(kind: str, options: Sequence[str] | None, answer: str) -> str | None:
    """Return a problem description, or None when the question is well-formed."""
    kind = (kind or "").strip().lower()
    if not (answer or "").strip():
        return "answer is empty"

    if kind in CHOICE_TYPES:
        if not options or len(options) != 4:
            return f"{kind} question needs exactly 4 options, got {len(options or [])}"
        if any(not (option or "").strip() for option in options):
            return f"{kind} question has a blank option"
        if len(set(options)) != 4:
            return f"{kind} question has duplicate options"
        if answer not in options:
            return f"answer {answer!r} does not match any option"
        return None

    if kind == "true_false":
        if options and list(options) != TRUE_FALSE_OPTIONS:
            return f"true_false options must be {TRUE_FALSE_OPTIONS}, got {list(options)}"
        if answer not in TRUE_FALSE_OPTIONS:
            return f"true_false answer must be 'True' or 'False', got {answer!r}"
        return None

    return None


def keep_valid(
    items: Sequence[ItemT],
    problem_of: Callable[[ItemT], str | None],
    *,
    flow_name: str,
) -> list[ItemT]:
    """Drop malformed items, logging each one."""
    valid: list[ItemT] = []
    for index, item in enumerate(items):
        problem = problem_of(item)
        if problem:
            logger.warning("%s: dropping item %s (%s)", flow_name, index, problem)
            continue
        valid.append(item)
    return valid
