from typing import Any

from mgqs.flows.artifacts import (
    BoardQuestionsInput,
    BoardQuestionsOutput,
    NeetQuestionsInput,
    NeetQuestionsOutput,
    StreamQuestionsInput,
    StreamQuestionsOutput,
)
from mgqs.flows.base import GenerationFlow
from mgqs.flows.llm_client import LLMClient
from mgqs.flows.prompts.exams import (
    BOARD_QUESTIONS_TEMPLATE,
    BOARD_SYSTEM_PROMPT,
    NEET_QUESTIONS_TEMPLATE,
    NEET_SYSTEM_PROMPT,
    STREAM_QUESTIONS_TEMPLATE,
    STREAM_SYSTEM_PROMPT,
)

# Each stream id switches on exactly one stream-specific prompt section.
STREAM_FLAGS = {
    "jee": "is_jee",
    "neet": "is_neet",
    "upsc": "is_upsc",
    "mbbs": "is_mbbs",
    "clat": "is_clat",
    "ssc": "is_ssc",
    "banking": "is_banking",
    "nda": "is_nda",
    "ca-foundation": "is_ca_foundation",
    "cuet": "is_cuet",
    "btech": "is_btech",
    "iti-polytechnic": "is_iti_polytechnic",
}


class BoardQuestionsFlow(GenerationFlow[BoardQuestionsInput, BoardQuestionsOutput]):
    name = "generate_board_questions"
    input_schema = BoardQuestionsInput
    output_schema = BoardQuestionsOutput
    system_prompt = BOARD_SYSTEM_PROMPT
    template = BOARD_QUESTIONS_TEMPLATE
    items_field = "questions"
    empty_message = "Failed to generate questions for the provided criteria. Please try different chapters or question types."

    def post_validate(self, output, input_data):
        return self.keep_valid_questions(output)


class NeetQuestionsFlow(GenerationFlow[NeetQuestionsInput, NeetQuestionsOutput]):
    name = "generate_neet_questions"
    input_schema = NeetQuestionsInput
    output_schema = NeetQuestionsOutput
    system_prompt = NEET_SYSTEM_PROMPT
    template = NEET_QUESTIONS_TEMPLATE
    items_field = "questions"
    empty_message = "Failed to generate NEET questions for the provided chapter. Please try again."

    def post_validate(self, output, input_data):
        return self.keep_valid_questions(output)


class StreamQuestionsFlow(GenerationFlow[StreamQuestionsInput, StreamQuestionsOutput]):
    name = "generate_stream_questions"
    input_schema = StreamQuestionsInput
    output_schema = StreamQuestionsOutput
    system_prompt = STREAM_SYSTEM_PROMPT
    template = STREAM_QUESTIONS_TEMPLATE
    context_fields = tuple(STREAM_FLAGS.values())
    items_field = "questions"
    empty_message = "Failed to generate questions for the provided topic. Please try a different topic."

    def build_context(self, input_data: StreamQuestionsInput) -> dict[str, Any]:
        context = input_data.model_dump()
        for stream_id, flag in STREAM_FLAGS.items():
            context[flag] = input_data.stream_id == stream_id
        return context

    def post_validate(self, output, input_data):
        return self.keep_valid_questions(output)


async def generate_board_questions(input_data, *, llm: LLMClient | None = None) -> BoardQuestionsOutput:
    return await BoardQuestionsFlow(llm=llm).run(input_data)


async def generate_neet_questions(input_data, *, llm: LLMClient | None = None) -> NeetQuestionsOutput:
    return await NeetQuestionsFlow(llm=llm).run(input_data)


async def generate_stream_questions(input_data, *, llm: LLMClient | None = None) -> StreamQuestionsOutput:
    return await StreamQuestionsFlow(llm=llm).run(input_data)
