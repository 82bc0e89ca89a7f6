import logging
import random
import re
from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from mgqs.core.config import settings
from mgqs.flows.artifacts import UsernameCheckInput, UsernameCheckOutput, UsernameSuggestions
from mgqs.flows.base import GenerationFlow
from mgqs.flows.errors import FlowError, InvalidInput
from mgqs.flows.llm_client import LLMClient
from mgqs.flows.prompts.account import USERNAME_SUGGESTION_TEMPLATE, USERNAME_SYSTEM_PROMPT

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
USERNAME_PATTERN = re.compile(r"^[a-z0-9_]+$")
SUGGESTION_COUNT = 4


class UsernameDirectory(Protocol):
    def exists(self, candidate: str) -> bool: ...


class InMemoryUsernameDirectory:
    """Set-backed directory; seeded with the reserved names by default."""

    def __init__(self, usernames: Iterable[str] | None = None):
        seed = settings.RESERVED_USERNAMES if usernames is None else usernames
        self._usernames = {name.lower() for name in seed}

    def add(self, username: str) -> None:
        self._usernames.add(username.lower())

    def exists(self, candidate: str) -> bool:
        return candidate.lower() in self._usernames


def username_problem(username: str) -> str | None:
    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        return f"Username must be between {USERNAME_MIN_LENGTH} and {USERNAME_MAX_LENGTH} characters long."
    if not USERNAME_PATTERN.match(username):
        return "Username can only contain lowercase letters, numbers, and underscores (_)."
    return None


def fallback_suggestions(username: str) -> list[str]:
    """Fixed alternatives; the base is trimmed so every affix survives the length cap."""
    candidates = [
        f"{username[:USERNAME_MAX_LENGTH - 2]}{random.randint(10, 99)}",
        f"real_{username[:USERNAME_MAX_LENGTH - 5]}",
        f"{username[:USERNAME_MAX_LENGTH - 4]}_edu",
        f"i_am_{username[:USERNAME_MAX_LENGTH - 5]}",
    ]
    return [candidate for candidate in candidates if candidate != username]


class UsernameSuggestionFlow(GenerationFlow[UsernameCheckInput, UsernameSuggestions]):
    name = "suggest_usernames"
    input_schema = UsernameCheckInput
    output_schema = UsernameSuggestions
    system_prompt = USERNAME_SYSTEM_PROMPT
    template = USERNAME_SUGGESTION_TEMPLATE
    items_field = "suggestions"
    empty_message = "No usable username suggestions were generated."

    def __init__(
        self,
        directory: UsernameDirectory,
        llm: LLMClient | None = None,
        model_name: str | None = None,
    ):
        super().__init__(llm=llm, model_name=model_name)
        self.directory = directory

    def is_taken(self, candidate: str, input_data: UsernameCheckInput) -> bool:
        taken = {name.lower() for name in input_data.existing_usernames}
        return candidate.lower() in taken or self.directory.exists(candidate)

    def usable(self, candidates: Iterable[str], input_data: UsernameCheckInput) -> list[str]:
        usable: list[str] = []
        for suggestion in candidates:
            candidate = suggestion.strip()
            if candidate in usable or candidate == input_data.username:
                continue
            if username_problem(candidate) or self.is_taken(candidate, input_data):
                logger.warning("%s: dropping suggestion %r", self.name, candidate)
                continue
            usable.append(candidate)
        return usable[:SUGGESTION_COUNT]

    def post_validate(self, output, input_data):
        return UsernameSuggestions(suggestions=self.usable(output.suggestions, input_data))

    def fallback(self, input_data, error: FlowError) -> UsernameSuggestions:
        return UsernameSuggestions(suggestions=self.fallback_set(input_data))

    def fallback_set(self, input_data: UsernameCheckInput) -> list[str]:
        return self.usable(fallback_suggestions(input_data.username), input_data)


async def check_username(
    input_data: UsernameCheckInput | Mapping[str, Any],
    *,
    directory: UsernameDirectory | None = None,
    llm: LLMClient | None = None,
) -> UsernameCheckOutput:
    """
    Two-stage availability check.

    Format and availability are decided locally; the model is only asked for
    alternatives once the name turns out to be taken, and any failure there
    degrades to a fixed set of suggestions instead of an error.
    """
    directory = directory or InMemoryUsernameDirectory()
    flow = UsernameSuggestionFlow(directory=directory, llm=llm)
    request = flow.validate_input(input_data)
    username = request.username

    problem = username_problem(username)
    if problem:
        return UsernameCheckOutput(status="invalid", message=problem)

    if not flow.is_taken(username, request):
        return UsernameCheckOutput(status="available", message="Username is available!")

    try:
        result = await flow.run(request)
        suggestions = result.suggestions
    except InvalidInput:
        raise
    except FlowError as exc:
        logger.warning("Username suggestions unavailable (%s); using fallback set.", exc.code)
        suggestions = flow.fallback_set(request)

    return UsernameCheckOutput(
        status="taken",
        message="This username is already taken. Try one of these suggestions.",
        suggestions=suggestions,
    )
