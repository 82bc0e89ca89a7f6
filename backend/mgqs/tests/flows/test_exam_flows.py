import pytest

from mgqs.flows.artifacts import (
    BoardQuestion,
    BoardQuestionsOutput,
    NeetQuestion,
    NeetQuestionsOutput,
    StreamQuestion,
    StreamQuestionsOutput,
)
from mgqs.flows.errors import GenerationFailed, InvalidInput
from mgqs.flows.exams import (
    STREAM_FLAGS,
    StreamQuestionsFlow,
    generate_board_questions,
    generate_neet_questions,
    generate_stream_questions,
)

STREAM_REQUEST = {
    "stream_id": "jee",
    "stream_name": "JEE Main",
    "level": "Class 12",
    "subject": "Physics",
    "chapter": "Electrostatics",
    "number_of_questions": 2,
}


def _stream_question(**overrides) -> StreamQuestion:
    fields = {
        "type": "numerical",
        "text": "Two charges of 1 uC are 1 m apart. Find the force in mN.",
        "answer": "9",
        "explanation": "F = kq1q2/r^2.",
        "difficulty": "medium",
    }
    fields.update(overrides)
    return StreamQuestion(**fields)


@pytest.mark.asyncio
async def test_board_questions_accept_free_form_types(stub_llm):
    llm = stub_llm(
        BoardQuestionsOutput(
            questions=[
                BoardQuestion(
                    type="MCQ",
                    question="The unit of electric current is",
                    options=["Volt", "Ampere", "Ohm", "Watt"],
                    answer="Ampere",
                    marks=1,
                    explanation="Current is measured in amperes.",
                    is_likely_to_appear=True,
                ),
                BoardQuestion(
                    type="Short Answer",
                    question="State Ohm's law.",
                    answer="V = IR at constant temperature.",
                    marks=2,
                    explanation="Definition.",
                    is_likely_to_appear=True,
                ),
            ]
        )
    )

    result = await generate_board_questions(
        {
            "board_name": "SEBA",
            "class_name": "10",
            "subject": "Science",
            "chapters": "Electricity",
            "question_types": ["MCQ", "Short Answer"],
            "medium": "assamese",
            "number_of_questions": 2,
        },
        llm=llm,
    )

    assert len(result.questions) == 2
    text = llm.generate_structured.await_args.kwargs["payload"].text
    assert "MUST be assamese" in text
    assert "of the types: MCQ, Short Answer." in text


@pytest.mark.asyncio
async def test_board_questions_need_at_least_one_type(stub_llm):
    llm = stub_llm()

    with pytest.raises(InvalidInput):
        await generate_board_questions(
            {
                "board_name": "CBSE",
                "class_name": "10",
                "subject": "Science",
                "chapters": "Electricity",
                "question_types": [],
                "is_comprehensive": True,
            },
            llm=llm,
        )


@pytest.mark.asyncio
async def test_neet_comprehensive_request_renders_comprehensive_branch(stub_llm):
    llm = stub_llm(
        NeetQuestionsOutput(
            questions=[
                NeetQuestion(
                    type="numerical",
                    text="Calculate the molar mass of water.",
                    answer="18 g/mol",
                    explanation="2(1) + 16.",
                    difficulty="easy",
                )
            ]
        )
    )

    await generate_neet_questions(
        {"class_level": "11", "subject": "Chemistry", "chapter": "Mole Concept", "is_comprehensive": True},
        llm=llm,
    )

    text = llm.generate_structured.await_args.kwargs["payload"].text
    assert "COMPREHENSIVE set of NEET-pattern questions" in text
    assert "Generate exactly" not in text


@pytest.mark.asyncio
async def test_neet_questions_fail_when_empty(stub_llm):
    llm = stub_llm(NeetQuestionsOutput(questions=[]))

    with pytest.raises(GenerationFailed):
        await generate_neet_questions(
            {"class_level": "12", "subject": "Biology", "chapter": "Genetics", "number_of_questions": 5},
            llm=llm,
        )


@pytest.mark.asyncio
async def test_stream_questions_switch_on_only_the_requested_section(stub_llm):
    llm = stub_llm(StreamQuestionsOutput(questions=[_stream_question()]))

    await generate_stream_questions(STREAM_REQUEST, llm=llm)

    text = llm.generate_structured.await_args.kwargs["payload"].text
    assert "JEE Main/Advanced" in text
    assert "NCERT syllabus and the NEET pattern" not in text
    assert "clinical reasoning" not in text


def test_stream_context_sets_exactly_one_flag(stub_llm):
    flow = StreamQuestionsFlow(llm=stub_llm())

    context = flow.build_context(flow.validate_input({**STREAM_REQUEST, "stream_id": "ca-foundation"}))

    enabled = [flag for flag in STREAM_FLAGS.values() if context[flag]]
    assert enabled == ["is_ca_foundation"]


@pytest.mark.asyncio
async def test_stream_questions_drop_malformed_mcqs(stub_llm):
    llm = stub_llm(
        StreamQuestionsOutput(
            questions=[
                _stream_question(),
                _stream_question(type="mcq", options=["1", "2", "3"], answer="2"),
            ]
        )
    )

    result = await generate_stream_questions(STREAM_REQUEST, llm=llm)

    assert [q.type for q in result.questions] == ["numerical"]


@pytest.mark.asyncio
async def test_unknown_stream_is_rejected(stub_llm):
    llm = stub_llm()

    with pytest.raises(InvalidInput) as exc_info:
        await generate_stream_questions({**STREAM_REQUEST, "stream_id": "gate"}, llm=llm)

    assert exc_info.value.details[0].constraint == "enum"
