import pytest

from mgqs.flows.artifacts import (
    GrammarQuestionOutput,
    JarvisOutput,
    NotesByChapterOutput,
    SolutionStep,
    SolveProblemOutput,
    SubjectQuestionOutput,
    SummarizeTextOutput,
    TermDefinition,
)
from mgqs.flows.errors import GenerationFailed, InvalidInput, InvocationError, UpstreamUnavailable
from mgqs.flows.tutor import (
    JARVIS_FALLBACK,
    SOLVER_FALLBACK,
    SUBJECT_EXPERT_FALLBACK,
    answer_grammar_question,
    answer_subject_question,
    ask_jarvis,
    generate_notes_by_chapter,
    solve_problem,
    summarize_text,
)

FULL_SOLUTION = SolveProblemOutput(
    is_solvable=True,
    hint="Isolate x first.",
    steps=[
        SolutionStep(step_number=2, explanation="Divide both sides by 2, so x = 4."),
        SolutionStep(step_number=1, explanation="Subtract 3 from both sides: 2x = 8."),
    ],
    final_answer="x = 4",
)


@pytest.mark.asyncio
async def test_grammar_answer_is_returned(stub_llm):
    llm = stub_llm(GrammarQuestionOutput(ai_answer="Use 'fewer' with countable nouns."))

    result = await answer_grammar_question({"user_question": "fewer or less?"}, llm=llm)

    assert result.ai_answer == "Use 'fewer' with countable nouns."


@pytest.mark.asyncio
async def test_blank_grammar_answer_is_a_generation_failure(stub_llm):
    llm = stub_llm(GrammarQuestionOutput(ai_answer="  "))

    with pytest.raises(GenerationFailed):
        await answer_grammar_question({"user_question": "What is a gerund?"}, llm=llm)


@pytest.mark.asyncio
async def test_subject_expert_renders_history_in_order(stub_llm):
    llm = stub_llm(SubjectQuestionOutput(ai_answer="Mitochondria release energy."))

    await answer_subject_question(
        {
            "grade_level": "9",
            "subject": "Biology",
            "chapter": "The Fundamental Unit of Life",
            "user_question": "And what do mitochondria do?",
            "conversation_history": [
                {"speaker": "user", "text": "What is a cell?"},
                {"speaker": "ai", "text": "The basic unit of life."},
            ],
        },
        llm=llm,
    )

    text = llm.generate_structured.await_args.kwargs["payload"].text
    assert text.index("User: What is a cell?") < text.index("Expert: The basic unit of life.")
    assert text.index("Expert: The basic unit of life.") < text.index("And what do mitochondria do?")


@pytest.mark.asyncio
async def test_subject_expert_without_history_skips_the_section(stub_llm):
    llm = stub_llm(SubjectQuestionOutput(ai_answer="Cells divide by mitosis."))

    await answer_subject_question(
        {"grade_level": "9", "subject": "Biology", "chapter": "Cells", "user_question": "How do cells divide?"},
        llm=llm,
    )

    text = llm.generate_structured.await_args.kwargs["payload"].text
    assert "Conversation history" not in text


@pytest.mark.asyncio
async def test_subject_expert_falls_back_on_malformed_output(stub_llm):
    llm = stub_llm(side_effect=InvocationError("malformed", "garbage"))

    result = await answer_subject_question(
        {"grade_level": "9", "subject": "Biology", "chapter": "Cells", "user_question": "What is a cell?"},
        llm=llm,
    )

    assert result.ai_answer == SUBJECT_EXPERT_FALLBACK


@pytest.mark.asyncio
async def test_jarvis_falls_back_on_blank_answer(stub_llm):
    llm = stub_llm(JarvisOutput(jarvis_answer=""))

    result = await ask_jarvis({"user_question": "What's the capital of Assam?"}, llm=llm)

    assert result.jarvis_answer == JARVIS_FALLBACK


@pytest.mark.asyncio
async def test_jarvis_does_not_mask_an_overloaded_provider(stub_llm):
    llm = stub_llm(side_effect=InvocationError("overloaded", "503"))

    with pytest.raises(UpstreamUnavailable):
        await ask_jarvis({"user_question": "Hello?"}, llm=llm)


@pytest.mark.asyncio
async def test_solve_problem_returns_ordered_steps(stub_llm):
    llm = stub_llm(FULL_SOLUTION)

    result = await solve_problem({"user_question": "Solve 2x + 3 = 11"}, llm=llm)

    assert [step.step_number for step in result.steps] == [1, 2]
    assert result.final_answer == "x = 4"
    assert result.hint is None


@pytest.mark.asyncio
async def test_solve_problem_hint_mode_withholds_solution(stub_llm):
    llm = stub_llm(FULL_SOLUTION)

    result = await solve_problem({"user_question": "Solve 2x + 3 = 11", "request_hint": True}, llm=llm)

    assert result.hint == "Isolate x first."
    assert result.steps is None
    assert result.final_answer is None
    assert result.model_dump(exclude_none=True) == {"is_solvable": True, "hint": "Isolate x first."}
    text = llm.generate_structured.await_args.kwargs["payload"].text
    assert "HINT ONLY" in text


@pytest.mark.asyncio
async def test_solve_problem_unsolvable_keeps_only_clarification(stub_llm):
    llm = stub_llm(
        FULL_SOLUTION.model_copy(update={"is_solvable": False, "clarification_needed": "Which equation?"})
    )

    result = await solve_problem({"user_question": "solve it"}, llm=llm)

    assert result.model_dump(exclude_none=True) == {
        "is_solvable": False,
        "clarification_needed": "Which equation?",
    }


@pytest.mark.asyncio
async def test_solve_problem_incomplete_solution_falls_back(stub_llm):
    llm = stub_llm(SolveProblemOutput(is_solvable=True, steps=[]))

    result = await solve_problem({"user_question": "Solve 2x + 3 = 11"}, llm=llm)

    assert result.is_solvable is False
    assert result.clarification_needed == SOLVER_FALLBACK


@pytest.mark.asyncio
async def test_solve_problem_attaches_the_image(stub_llm):
    llm = stub_llm(FULL_SOLUTION)
    image = "data:image/jpeg;base64,/9j/AAAA"

    await solve_problem({"image_data_uri": image, "medium": "hindi"}, llm=llm)

    payload = llm.generate_structured.await_args.kwargs["payload"]
    assert [attachment.url for attachment in payload.media] == [image]
    assert "User's uploaded image: [Image 1]" in payload.text
    assert "User's typed question" not in payload.text
    assert 'MUST be in the "hindi" language' in payload.text


@pytest.mark.asyncio
async def test_solve_problem_needs_text_or_image(stub_llm):
    llm = stub_llm()

    with pytest.raises(InvalidInput):
        await solve_problem({"user_question": "   "}, llm=llm)

    llm.generate_structured.assert_not_awaited()


@pytest.mark.asyncio
async def test_summarize_text_passes_definitions_through(stub_llm):
    summary = SummarizeTextOutput(
        summary="Plants make food from light.",
        bullet_points=["Needs sunlight", "Releases oxygen"],
        definitions=[TermDefinition(term="Chlorophyll", definition="Green pigment.")],
    )
    llm = stub_llm(summary)

    result = await summarize_text({"text_to_summarize": "Photosynthesis is..."}, llm=llm)

    assert result == summary


@pytest.mark.asyncio
async def test_notes_allow_empty_sections(stub_llm):
    llm = stub_llm(NotesByChapterOutput(summary="Force changes motion.", main_points=["F = ma"]))

    result = await generate_notes_by_chapter(
        {"grade_level": "9", "subject": "Physics", "chapter": "Force and Laws of Motion"}, llm=llm
    )

    assert result.key_terms == []
    assert result.sample_questions == []


@pytest.mark.asyncio
async def test_notes_fail_when_every_section_is_empty(stub_llm):
    llm = stub_llm(NotesByChapterOutput(summary=""))

    with pytest.raises(GenerationFailed):
        await generate_notes_by_chapter(
            {"grade_level": "9", "subject": "Physics", "chapter": "Gravitation"}, llm=llm
        )
