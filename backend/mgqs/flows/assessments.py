from mgqs.flows.artifacts import (
    FlashcardsInput,
    FlashcardsOutput,
    GrammarTestInput,
    GrammarTestOutput,
    MockTestInput,
    MockTestOutput,
    RecheckAnswerInput,
    RecheckAnswerOutput,
)
from mgqs.flows.base import GenerationFlow
from mgqs.flows.llm_client import LLMClient
from mgqs.flows.prompts.assessments import (
    FLASHCARDS_SYSTEM_PROMPT,
    FLASHCARDS_TEMPLATE,
    GRAMMAR_TEST_SYSTEM_PROMPT,
    GRAMMAR_TEST_TEMPLATE,
    MOCK_TEST_TEMPLATE,
    RECHECK_ANSWER_TEMPLATE,
    RECHECK_SYSTEM_PROMPT,
    TEST_SETTER_SYSTEM_PROMPT,
)
from mgqs.flows.validators import keep_valid


class MockTestFlow(GenerationFlow[MockTestInput, MockTestOutput]):
    name = "generate_mock_test"
    input_schema = MockTestInput
    output_schema = MockTestOutput
    system_prompt = TEST_SETTER_SYSTEM_PROMPT
    template = MOCK_TEST_TEMPLATE
    items_field = "questions"
    empty_message = "Failed to generate mock test for the specified criteria. Please try different chapters."

    def post_validate(self, output, input_data):
        return self.keep_valid_questions(output)


class GrammarTestFlow(GenerationFlow[GrammarTestInput, GrammarTestOutput]):
    name = "generate_grammar_test"
    input_schema = GrammarTestInput
    output_schema = GrammarTestOutput
    system_prompt = GRAMMAR_TEST_SYSTEM_PROMPT
    template = GRAMMAR_TEST_TEMPLATE
    items_field = "questions"
    empty_message = "Failed to generate grammar test for the specified criteria. Please try another topic."

    def post_validate(self, output, input_data):
        # The model occasionally mixes in other types; only the requested one is kept.
        output = output.model_copy(
            update={"questions": [q for q in output.questions if q.type == input_data.question_type]}
        )
        return self.keep_valid_questions(output)


class FlashcardsFlow(GenerationFlow[FlashcardsInput, FlashcardsOutput]):
    name = "generate_flashcards"
    input_schema = FlashcardsInput
    output_schema = FlashcardsOutput
    system_prompt = FLASHCARDS_SYSTEM_PROMPT
    template = FLASHCARDS_TEMPLATE
    items_field = "flashcards"
    empty_message = "Failed to generate flashcards for the specified chapter. Please try again."

    def post_validate(self, output, input_data):
        cards = keep_valid(
            output.flashcards,
            lambda card: None if card.front.strip() and card.back.strip() else "blank side",
            flow_name=self.name,
        )
        return output.model_copy(update={"flashcards": cards})


class RecheckAnswerFlow(GenerationFlow[RecheckAnswerInput, RecheckAnswerOutput]):
    name = "recheck_answer"
    input_schema = RecheckAnswerInput
    output_schema = RecheckAnswerOutput
    system_prompt = RECHECK_SYSTEM_PROMPT
    template = RECHECK_ANSWER_TEMPLATE


async def generate_mock_test(input_data, *, llm: LLMClient | None = None) -> MockTestOutput:
    return await MockTestFlow(llm=llm).run(input_data)


async def generate_grammar_test(input_data, *, llm: LLMClient | None = None) -> GrammarTestOutput:
    return await GrammarTestFlow(llm=llm).run(input_data)


async def generate_flashcards(input_data, *, llm: LLMClient | None = None) -> FlashcardsOutput:
    return await FlashcardsFlow(llm=llm).run(input_data)


async def recheck_answer(input_data, *, llm: LLMClient | None = None) -> RecheckAnswerOutput:
    return await RecheckAnswerFlow(llm=llm).run(input_data)
