import pytest

from mgqs.flows.artifacts import (
    Flashcard,
    FlashcardsOutput,
    GrammarTestOutput,
    GrammarTestQuestion,
    MockTestOutput,
    MockTestQuestion,
    RecheckAnswerOutput,
)
from mgqs.flows.assessments import (
    generate_flashcards,
    generate_grammar_test,
    generate_mock_test,
    recheck_answer,
)
from mgqs.flows.errors import GenerationFailed, InvalidInput


@pytest.mark.asyncio
async def test_mock_test_keeps_mixed_valid_questions(stub_llm):
    llm = stub_llm(
        MockTestOutput(
            questions=[
                MockTestQuestion(
                    type="multiple_choice",
                    text="Which gas do plants absorb?",
                    options=["Oxygen", "Carbon dioxide", "Nitrogen", "Helium"],
                    answer="Carbon dioxide",
                ),
                MockTestQuestion(
                    type="true_false",
                    text="Photosynthesis happens in the roots.",
                    options=["True", "False"],
                    answer="False",
                ),
                MockTestQuestion(
                    type="multiple_choice",
                    text="Chlorophyll is",
                    options=["Green", "Red", "Blue", "Green"],
                    answer="Green",
                ),
            ]
        )
    )

    result = await generate_mock_test(
        {
            "grade_level": "7",
            "subject": "Science",
            "chapters": "Nutrition in Plants, Respiration",
            "number_of_questions": 3,
        },
        llm=llm,
    )

    assert [q.type for q in result.questions] == ["multiple_choice", "true_false"]
    text = llm.generate_structured.await_args.kwargs["payload"].text
    assert 'chapter(s): "Nutrition in Plants, Respiration"' in text


@pytest.mark.asyncio
async def test_grammar_test_discards_other_question_types(stub_llm):
    llm = stub_llm(
        GrammarTestOutput(
            questions=[
                GrammarTestQuestion(type="direct_answer", text="Write the past tense of 'go'.", answer="went"),
                GrammarTestQuestion(type="true_false", text="'Quickly' is an adverb.", answer="True"),
            ]
        )
    )

    result = await generate_grammar_test(
        {"grade_level": "6", "topic": "Tenses", "question_type": "direct_answer", "number_of_questions": 2},
        llm=llm,
    )

    assert [q.answer for q in result.questions] == ["went"]


@pytest.mark.asyncio
async def test_grammar_test_fails_when_no_requested_type_is_returned(stub_llm):
    llm = stub_llm(
        GrammarTestOutput(
            questions=[GrammarTestQuestion(type="true_false", text="'Run' is a verb.", answer="True")]
        )
    )

    with pytest.raises(GenerationFailed):
        await generate_grammar_test(
            {"grade_level": "6", "topic": "Verbs", "question_type": "multiple_choice", "number_of_questions": 1},
            llm=llm,
        )


@pytest.mark.asyncio
async def test_flashcards_drop_blank_cards(stub_llm):
    llm = stub_llm(
        FlashcardsOutput(
            flashcards=[
                Flashcard(front="Photosynthesis", back="Making food using sunlight."),
                Flashcard(front="Stomata", back="   "),
            ]
        )
    )

    result = await generate_flashcards(
        {"grade_level": "7", "subject": "Science", "chapter": "Nutrition in Plants", "number_of_cards": 2},
        llm=llm,
    )

    assert [card.front for card in result.flashcards] == ["Photosynthesis"]


@pytest.mark.asyncio
async def test_flashcards_reject_zero_cards(stub_llm):
    llm = stub_llm()

    with pytest.raises(InvalidInput):
        await generate_flashcards(
            {"grade_level": "7", "subject": "Science", "chapter": "Cells", "number_of_cards": 0},
            llm=llm,
        )

    llm.generate_structured.assert_not_awaited()


@pytest.mark.asyncio
async def test_recheck_answer_passes_verdict_through(stub_llm):
    verdict = RecheckAnswerOutput(
        is_correct=False,
        correct_answer="The Sun",
        explanation="Plants get energy for photosynthesis from sunlight.",
    )
    llm = stub_llm(verdict)

    result = await recheck_answer(
        {
            "grade_level": "7",
            "subject": "Science",
            "chapter": "Nutrition in Plants",
            "question": "What is the main source of energy for plants?",
            "original_answer": "Soil",
        },
        llm=llm,
    )

    assert result == verdict
    text = llm.generate_structured.await_args.kwargs["payload"].text
    assert '"Soil"' in text
