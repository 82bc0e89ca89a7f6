from typing import Any

from mgqs.flows.artifacts import (
    ASSERTION_REASON_OPTIONS,
    ChapterMcqInput,
    DoubtToMcqInput,
    DoubtToMcqOutput,
    GenerateQuestionsInput,
    GenerateQuestionsOutput,
    McqSetOutput,
    QuestionsFromImageInput,
    QuestionsFromImageOutput,
    RegenerateQuestionInput,
    RegenerateQuestionOutput,
)
from mgqs.flows.base import GenerationFlow
from mgqs.flows.errors import FlowError, GenerationFailed
from mgqs.flows.llm_client import LLMClient
from mgqs.flows.prompts.questions import (
    CHAPTER_MCQ_TEMPLATE,
    DOUBT_TO_MCQ_SYSTEM_PROMPT,
    DOUBT_TO_MCQ_TEMPLATE,
    GENERATE_QUESTIONS_TEMPLATE,
    IMAGE_QUESTIONS_SYSTEM_PROMPT,
    IMAGE_QUESTIONS_TEMPLATE,
    PRACTICE_SYSTEM_PROMPT,
    REGENERATE_QUESTION_TEMPLATE,
    REGENERATE_SYSTEM_PROMPT,
)
from mgqs.flows.validators import CHOICE_TYPES, check_question

DOUBT_MCQ_LIMIT = 5


class GenerateQuestionsFlow(GenerationFlow[GenerateQuestionsInput, GenerateQuestionsOutput]):
    """
    Syllabus question/answer pairs.

    The prompt allows the model to return fewer questions than asked, so an
    empty list is passed through as a (degraded) success rather than an error.
    """

    name = "generate_questions"
    input_schema = GenerateQuestionsInput
    output_schema = GenerateQuestionsOutput
    system_prompt = PRACTICE_SYSTEM_PROMPT
    template = GENERATE_QUESTIONS_TEMPLATE
    items_field = "questions"
    allow_empty = True
    context_fields = ("has_options", "is_assertion_reason", "is_true_false", "assertion_reason_options")

    def build_context(self, input_data: GenerateQuestionsInput) -> dict[str, Any]:
        context = input_data.model_dump()
        context.update(
            has_options=input_data.question_type in CHOICE_TYPES,
            is_assertion_reason=input_data.question_type == "assertion_reason",
            is_true_false=input_data.question_type == "true_false",
            assertion_reason_options=ASSERTION_REASON_OPTIONS,
        )
        return context

    def post_validate(self, output, input_data):
        if input_data.question_type in CHOICE_TYPES or input_data.question_type == "true_false":
            return self.keep_valid_questions(output, kind=input_data.question_type)
        return output


class ChapterMcqFlow(GenerationFlow[ChapterMcqInput, McqSetOutput]):
    name = "generate_chapter_mcqs"
    input_schema = ChapterMcqInput
    output_schema = McqSetOutput
    system_prompt = PRACTICE_SYSTEM_PROMPT
    template = CHAPTER_MCQ_TEMPLATE
    items_field = "questions"
    empty_message = "Failed to generate MCQs for this chapter. Please try a different chapter or difficulty."

    def post_validate(self, output, input_data):
        return self.keep_valid_questions(output, kind="multiple_choice")


class DoubtToMcqFlow(GenerationFlow[DoubtToMcqInput, DoubtToMcqOutput]):
    name = "doubt_to_mcq"
    input_schema = DoubtToMcqInput
    output_schema = DoubtToMcqOutput
    system_prompt = DOUBT_TO_MCQ_SYSTEM_PROMPT
    template = DOUBT_TO_MCQ_TEMPLATE
    items_field = "questions"
    empty_message = "Failed to generate MCQs for the provided topic. Please try rephrasing."

    def post_validate(self, output, input_data):
        output = self.keep_valid_questions(output, kind="multiple_choice")
        return output.model_copy(update={"questions": output.questions[:DOUBT_MCQ_LIMIT]})


class RegenerateQuestionFlow(GenerationFlow[RegenerateQuestionInput, RegenerateQuestionOutput]):
    name = "regenerate_question"
    input_schema = RegenerateQuestionInput
    output_schema = RegenerateQuestionOutput
    system_prompt = REGENERATE_SYSTEM_PROMPT
    template = REGENERATE_QUESTION_TEMPLATE
    context_fields = ("is_multiple_choice", "is_assertion_reason", "has_options", "assertion_reason_options")

    def build_context(self, input_data: RegenerateQuestionInput) -> dict[str, Any]:
        context = input_data.model_dump()
        context.update(
            is_multiple_choice=input_data.question_type == "multiple_choice",
            is_assertion_reason=input_data.question_type == "assertion_reason",
            has_options=input_data.question_type in CHOICE_TYPES,
            assertion_reason_options=ASSERTION_REASON_OPTIONS,
        )
        return context

    def post_validate(self, output, input_data):
        if input_data.question_type not in CHOICE_TYPES:
            # Options are meaningless for open questions; never surface stray ones.
            return output.model_copy(update={"regenerated_options": None})
        problem = check_question(
            input_data.question_type, output.regenerated_options, output.regenerated_answer
        )
        if problem:
            raise GenerationFailed(f"The regenerated question was invalid ({problem}). Please try again.")
        return output

    def fallback(self, input_data: RegenerateQuestionInput, error: FlowError) -> RegenerateQuestionOutput:
        return RegenerateQuestionOutput(
            regenerated_question="Failed to regenerate question. Please try again.",
            regenerated_answer="N/A",
            regenerated_options=[] if input_data.question_type in CHOICE_TYPES else None,
        )


class QuestionsFromImageFlow(GenerationFlow[QuestionsFromImageInput, QuestionsFromImageOutput]):
    name = "generate_questions_from_image"
    input_schema = QuestionsFromImageInput
    output_schema = QuestionsFromImageOutput
    system_prompt = IMAGE_QUESTIONS_SYSTEM_PROMPT
    template = IMAGE_QUESTIONS_TEMPLATE
    items_field = "questions"
    empty_message = (
        "Failed to generate questions from the provided image(s). "
        "The content might be unclear or unsupported."
    )

    def post_validate(self, output, input_data):
        return self.keep_valid_questions(output)


async def generate_questions(input_data, *, llm: LLMClient | None = None) -> GenerateQuestionsOutput:
    return await GenerateQuestionsFlow(llm=llm).run(input_data)


async def generate_chapter_mcqs(input_data, *, llm: LLMClient | None = None) -> McqSetOutput:
    return await ChapterMcqFlow(llm=llm).run(input_data)


async def doubt_to_mcq(input_data, *, llm: LLMClient | None = None) -> DoubtToMcqOutput:
    return await DoubtToMcqFlow(llm=llm).run(input_data)


async def regenerate_question(input_data, *, llm: LLMClient | None = None) -> RegenerateQuestionOutput:
    return await RegenerateQuestionFlow(llm=llm).run(input_data)


async def generate_questions_from_image(
    input_data, *, llm: LLMClient | None = None
) -> QuestionsFromImageOutput:
    return await QuestionsFromImageFlow(llm=llm).run(input_data)
