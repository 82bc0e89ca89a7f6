import logging
from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from mgqs.flows.errors import (
    FlowError,
    GenerationFailed,
    InvalidInput,
    InvocationError,
    MalformedOutput,
    upstream_error_from,
)
from mgqs.flows.llm_client import LLMClient
from mgqs.flows.templating import PromptPayload, PromptTemplate
from mgqs.flows.validators import check_question, keep_valid

logger = logging.getLogger(__name__)

InType = TypeVar("InType", bound=BaseModel)
OutType = TypeVar("OutType", bound=BaseModel)


class GenerationFlow(Generic[InType, OutType]):
    """
    One feature's validate -> render -> invoke -> post-validate pipeline.

    Subclasses declare the schemas and template and override the hooks they need.
    A flow instance keeps no per-request state, so concurrent `run` calls are
    independent (and duplicate submissions issue duplicate model calls).
    """

    name: str = "generation"
    input_schema: type[InType]
    output_schema: type[OutType]
    system_prompt: str = ""
    template: PromptTemplate
    # Names added by `build_context` on top of the input fields.
    context_fields: tuple[str, ...] = ()
    # List field that must be non-empty on success, unless `allow_empty` is set.
    items_field: str | None = None
    allow_empty: bool = False
    empty_message: str = "The AI could not generate anything for these criteria. Please try different criteria."

    def __init__(self, llm: LLMClient | None = None, model_name: str | None = None):
        self.template.check_fields(self.input_schema, self.context_fields)
        self.llm = llm or LLMClient(model_name=model_name)

    def validate_input(self, input_data: InType | Mapping[str, Any]) -> InType:
        if isinstance(input_data, self.input_schema):
            return input_data
        try:
            return self.input_schema.model_validate(input_data)
        except ValidationError as exc:
            raise InvalidInput.from_validation_error(self.name, exc) from exc

    def build_context(self, input_data: InType) -> dict[str, Any]:
        return input_data.model_dump()

    def render(self, input_data: InType) -> PromptPayload:
        return self.template.render(self.build_context(input_data))

    async def invoke(self, payload: PromptPayload, input_data: InType) -> OutType:
        return await self.llm.generate_structured(
            system_prompt=self.system_prompt,
            payload=payload,
            response_schema=self.output_schema,
        )

    def post_validate(self, output: OutType, input_data: InType) -> OutType:
        return output

    def fallback(self, input_data: InType, error: FlowError) -> OutType | None:
        return None

    def keep_valid_questions(self, output: OutType, *, kind: str | None = None) -> OutType:
        """Drop questions whose options/answer break the choice rules."""
        questions = getattr(output, self.items_field)
        valid = keep_valid(
            questions,
            lambda q: check_question(kind or q.type, q.options, q.answer),
            flow_name=self.name,
        )
        return output.model_copy(update={self.items_field: valid})

    def _fallback_or_raise(self, input_data: InType, error: FlowError) -> OutType:
        substitute = self.fallback(input_data, error)
        if substitute is None:
            raise error
        logger.warning("%s: substituting fallback output after %s", self.name, error.code)
        return substitute

    async def run(self, input_data: InType | Mapping[str, Any]) -> OutType:
        request = self.validate_input(input_data)
        payload = self.render(request)

        logger.info("Running flow %s (%s attachment(s))", self.name, len(payload.media))
        try:
            output = await self.invoke(payload, request)
        except InvocationError as exc:
            error = upstream_error_from(exc)
            if isinstance(error, MalformedOutput):
                return self._fallback_or_raise(request, error)
            raise error from exc

        try:
            output = self.post_validate(output, request)
            if self.items_field and not self.allow_empty and not getattr(output, self.items_field):
                raise GenerationFailed(self.empty_message)
        except GenerationFailed as error:
            return self._fallback_or_raise(request, error)

        logger.info("Flow %s completed.", self.name)
        return output
