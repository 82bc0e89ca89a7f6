from typing import Any

from mgqs.flows.artifacts import (
    ConversationTurn,
    GrammarQuestionInput,
    GrammarQuestionOutput,
    JarvisInput,
    JarvisOutput,
    NotesByChapterInput,
    NotesByChapterOutput,
    SolveProblemInput,
    SolveProblemOutput,
    SubjectQuestionInput,
    SubjectQuestionOutput,
    SummarizeTextInput,
    SummarizeTextOutput,
)
from mgqs.flows.base import GenerationFlow
from mgqs.flows.errors import FlowError, GenerationFailed
from mgqs.flows.llm_client import LLMClient
from mgqs.flows.prompts.tutor import (
    GRAMMAR_QUESTION_TEMPLATE,
    GRAMMAR_TUTOR_SYSTEM_PROMPT,
    JARVIS_SYSTEM_PROMPT,
    JARVIS_TEMPLATE,
    NOTES_BY_CHAPTER_TEMPLATE,
    NOTES_SYSTEM_PROMPT,
    SOLVE_PROBLEM_TEMPLATE,
    SOLVER_SYSTEM_PROMPT,
    SUBJECT_EXPERT_SYSTEM_PROMPT,
    SUBJECT_QUESTION_TEMPLATE,
    SUMMARIZE_TEXT_TEMPLATE,
    SUMMARIZER_SYSTEM_PROMPT,
)

SUBJECT_EXPERT_FALLBACK = (
    "I'm sorry, I couldn't generate an answer for this specific topic at this time. "
    "Please try rephrasing or ask a different question."
)
JARVIS_FALLBACK = "I'm sorry, I couldn't process your request at this time. Please try again."
SOLVER_FALLBACK = (
    "I'm sorry, I couldn't generate a response for this question. Could you please try rephrasing it?"
)


def _history_context(turns: list[ConversationTurn] | None) -> list[dict[str, Any]]:
    return [
        {"text": turn.text, "is_user": turn.speaker == "user", "is_ai": turn.speaker == "ai"}
        for turn in turns or []
    ]


class GrammarAnswerFlow(GenerationFlow[GrammarQuestionInput, GrammarQuestionOutput]):
    name = "answer_grammar_question"
    input_schema = GrammarQuestionInput
    output_schema = GrammarQuestionOutput
    system_prompt = GRAMMAR_TUTOR_SYSTEM_PROMPT
    template = GRAMMAR_QUESTION_TEMPLATE

    def post_validate(self, output, input_data):
        if not output.ai_answer.strip():
            raise GenerationFailed("Couldn't answer that grammar question. Please try rephrasing it.")
        return output


class SubjectExpertFlow(GenerationFlow[SubjectQuestionInput, SubjectQuestionOutput]):
    name = "answer_subject_question"
    input_schema = SubjectQuestionInput
    output_schema = SubjectQuestionOutput
    system_prompt = SUBJECT_EXPERT_SYSTEM_PROMPT
    template = SUBJECT_QUESTION_TEMPLATE

    def build_context(self, input_data: SubjectQuestionInput) -> dict[str, Any]:
        context = input_data.model_dump()
        context["conversation_history"] = _history_context(input_data.conversation_history)
        return context

    def post_validate(self, output, input_data):
        if not output.ai_answer.strip():
            raise GenerationFailed(SUBJECT_EXPERT_FALLBACK)
        return output

    def fallback(self, input_data, error: FlowError) -> SubjectQuestionOutput:
        return SubjectQuestionOutput(ai_answer=SUBJECT_EXPERT_FALLBACK)


class JarvisFlow(GenerationFlow[JarvisInput, JarvisOutput]):
    name = "ask_jarvis"
    input_schema = JarvisInput
    output_schema = JarvisOutput
    system_prompt = JARVIS_SYSTEM_PROMPT
    template = JARVIS_TEMPLATE

    def build_context(self, input_data: JarvisInput) -> dict[str, Any]:
        return {
            "user_question": input_data.user_question,
            "conversation_history": _history_context(input_data.conversation_history),
        }

    def post_validate(self, output, input_data):
        if not output.jarvis_answer.strip():
            raise GenerationFailed(JARVIS_FALLBACK)
        return output

    def fallback(self, input_data, error: FlowError) -> JarvisOutput:
        return JarvisOutput(jarvis_answer=JARVIS_FALLBACK)


class SolveProblemFlow(GenerationFlow[SolveProblemInput, SolveProblemOutput]):
    """
    Step-by-step solver for typed and/or photographed problems.

    Output is reshaped so each mode only carries its own fields: a hint request
    never contains steps or a final answer, an unsolvable problem carries only
    the clarification.
    """

    name = "solve_problem"
    input_schema = SolveProblemInput
    output_schema = SolveProblemOutput
    system_prompt = SOLVER_SYSTEM_PROMPT
    template = SOLVE_PROBLEM_TEMPLATE

    def post_validate(self, output, input_data):
        if not output.is_solvable:
            return SolveProblemOutput(
                is_solvable=False,
                clarification_needed=(output.clarification_needed or "").strip() or SOLVER_FALLBACK,
            )

        if input_data.request_hint:
            if not (output.hint or "").strip():
                raise GenerationFailed("Couldn't come up with a hint for this problem. Please try rephrasing it.")
            return SolveProblemOutput(is_solvable=True, hint=output.hint)

        if not output.steps or not (output.final_answer or "").strip():
            raise GenerationFailed("The solution came back incomplete. Please try rephrasing the problem.")
        steps = sorted(output.steps, key=lambda step: step.step_number)
        return SolveProblemOutput(is_solvable=True, steps=steps, final_answer=output.final_answer)

    def fallback(self, input_data, error: FlowError) -> SolveProblemOutput:
        return SolveProblemOutput(is_solvable=False, clarification_needed=SOLVER_FALLBACK)


class SummarizeTextFlow(GenerationFlow[SummarizeTextInput, SummarizeTextOutput]):
    name = "summarize_text"
    input_schema = SummarizeTextInput
    output_schema = SummarizeTextOutput
    system_prompt = SUMMARIZER_SYSTEM_PROMPT
    template = SUMMARIZE_TEXT_TEMPLATE

    def post_validate(self, output, input_data):
        if not output.summary.strip():
            raise GenerationFailed("Failed to summarize the provided text. Please try a shorter or clearer passage.")
        return output


class NotesByChapterFlow(GenerationFlow[NotesByChapterInput, NotesByChapterOutput]):
    name = "generate_notes_by_chapter"
    input_schema = NotesByChapterInput
    output_schema = NotesByChapterOutput
    system_prompt = NOTES_SYSTEM_PROMPT
    template = NOTES_BY_CHAPTER_TEMPLATE

    def post_validate(self, output, input_data):
        # Individual sections may legitimately be empty, but not all of them.
        if not (output.summary.strip() or output.key_terms or output.main_points or output.sample_questions):
            raise GenerationFailed("Failed to generate notes for the specified chapter. Please check the chapter name.")
        return output


async def answer_grammar_question(input_data, *, llm: LLMClient | None = None) -> GrammarQuestionOutput:
    return await GrammarAnswerFlow(llm=llm).run(input_data)


async def answer_subject_question(input_data, *, llm: LLMClient | None = None) -> SubjectQuestionOutput:
    return await SubjectExpertFlow(llm=llm).run(input_data)


async def ask_jarvis(input_data, *, llm: LLMClient | None = None) -> JarvisOutput:
    return await JarvisFlow(llm=llm).run(input_data)


async def solve_problem(input_data, *, llm: LLMClient | None = None) -> SolveProblemOutput:
    return await SolveProblemFlow(llm=llm).run(input_data)


async def summarize_text(input_data, *, llm: LLMClient | None = None) -> SummarizeTextOutput:
    return await SummarizeTextFlow(llm=llm).run(input_data)


async def generate_notes_by_chapter(input_data, *, llm: LLMClient | None = None) -> NotesByChapterOutput:
    return await NotesByChapterFlow(llm=llm).run(input_data)
