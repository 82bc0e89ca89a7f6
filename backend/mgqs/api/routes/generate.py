from fastapi import APIRouter

from mgqs.api.deps import LLMDep, UsernameDirectoryDep
from mgqs.flows import assessments, exams, media, questions, tutor, username
from mgqs.flows.artifacts import (
    AvatarInput,
    AvatarOutput,
    BoardQuestionsInput,
    BoardQuestionsOutput,
    ChapterMcqInput,
    DoubtToMcqInput,
    DoubtToMcqOutput,
    FlashcardsInput,
    FlashcardsOutput,
    GenerateQuestionsInput,
    GenerateQuestionsOutput,
    GrammarQuestionInput,
    GrammarQuestionOutput,
    GrammarTestInput,
    GrammarTestOutput,
    JarvisInput,
    JarvisOutput,
    McqSetOutput,
    MockTestInput,
    MockTestOutput,
    NeetQuestionsInput,
    NeetQuestionsOutput,
    NotesByChapterInput,
    NotesByChapterOutput,
    QuestionsFromImageInput,
    QuestionsFromImageOutput,
    RecheckAnswerInput,
    RecheckAnswerOutput,
    RegenerateQuestionInput,
    RegenerateQuestionOutput,
    SolveProblemInput,
    SolveProblemOutput,
    StreamQuestionsInput,
    StreamQuestionsOutput,
    SubjectQuestionInput,
    SubjectQuestionOutput,
    SummarizeTextInput,
    SummarizeTextOutput,
    UsernameCheckInput,
    UsernameCheckOutput,
    VoiceChatInput,
    VoiceChatOutput,
)

router = APIRouter()


# --- practice questions ---------------------------------------------------------


@router.post("/questions", response_model=GenerateQuestionsOutput, response_model_exclude_none=True)
async def generate_questions(payload: GenerateQuestionsInput, llm: LLMDep) -> GenerateQuestionsOutput:
    return await questions.generate_questions(payload, llm=llm)


@router.post("/chapter-mcqs", response_model=McqSetOutput, response_model_exclude_none=True)
async def generate_chapter_mcqs(payload: ChapterMcqInput, llm: LLMDep) -> McqSetOutput:
    return await questions.generate_chapter_mcqs(payload, llm=llm)


@router.post("/doubt-to-mcq", response_model=DoubtToMcqOutput, response_model_exclude_none=True)
async def doubt_to_mcq(payload: DoubtToMcqInput, llm: LLMDep) -> DoubtToMcqOutput:
    return await questions.doubt_to_mcq(payload, llm=llm)


@router.post("/regenerate-question", response_model=RegenerateQuestionOutput, response_model_exclude_none=True)
async def regenerate_question(payload: RegenerateQuestionInput, llm: LLMDep) -> RegenerateQuestionOutput:
    return await questions.regenerate_question(payload, llm=llm)


@router.post("/questions-from-image", response_model=QuestionsFromImageOutput, response_model_exclude_none=True)
async def generate_questions_from_image(
    payload: QuestionsFromImageInput, llm: LLMDep
) -> QuestionsFromImageOutput:
    return await questions.generate_questions_from_image(payload, llm=llm)


# --- assessments ----------------------------------------------------------------


@router.post("/mock-test", response_model=MockTestOutput, response_model_exclude_none=True)
async def generate_mock_test(payload: MockTestInput, llm: LLMDep) -> MockTestOutput:
    return await assessments.generate_mock_test(payload, llm=llm)


@router.post("/grammar-test", response_model=GrammarTestOutput, response_model_exclude_none=True)
async def generate_grammar_test(payload: GrammarTestInput, llm: LLMDep) -> GrammarTestOutput:
    return await assessments.generate_grammar_test(payload, llm=llm)


@router.post("/flashcards", response_model=FlashcardsOutput, response_model_exclude_none=True)
async def generate_flashcards(payload: FlashcardsInput, llm: LLMDep) -> FlashcardsOutput:
    return await assessments.generate_flashcards(payload, llm=llm)


@router.post("/recheck-answer", response_model=RecheckAnswerOutput, response_model_exclude_none=True)
async def recheck_answer(payload: RecheckAnswerInput, llm: LLMDep) -> RecheckAnswerOutput:
    return await assessments.recheck_answer(payload, llm=llm)


# --- exams ----------------------------------------------------------------------


@router.post("/board-questions", response_model=BoardQuestionsOutput, response_model_exclude_none=True)
async def generate_board_questions(payload: BoardQuestionsInput, llm: LLMDep) -> BoardQuestionsOutput:
    return await exams.generate_board_questions(payload, llm=llm)


@router.post("/neet-questions", response_model=NeetQuestionsOutput, response_model_exclude_none=True)
async def generate_neet_questions(payload: NeetQuestionsInput, llm: LLMDep) -> NeetQuestionsOutput:
    return await exams.generate_neet_questions(payload, llm=llm)


@router.post("/stream-questions", response_model=StreamQuestionsOutput, response_model_exclude_none=True)
async def generate_stream_questions(payload: StreamQuestionsInput, llm: LLMDep) -> StreamQuestionsOutput:
    return await exams.generate_stream_questions(payload, llm=llm)


# --- tutoring -------------------------------------------------------------------


@router.post("/grammar-answer", response_model=GrammarQuestionOutput, response_model_exclude_none=True)
async def answer_grammar_question(payload: GrammarQuestionInput, llm: LLMDep) -> GrammarQuestionOutput:
    return await tutor.answer_grammar_question(payload, llm=llm)


@router.post("/subject-answer", response_model=SubjectQuestionOutput, response_model_exclude_none=True)
async def answer_subject_question(payload: SubjectQuestionInput, llm: LLMDep) -> SubjectQuestionOutput:
    return await tutor.answer_subject_question(payload, llm=llm)


@router.post("/jarvis", response_model=JarvisOutput, response_model_exclude_none=True)
async def ask_jarvis(payload: JarvisInput, llm: LLMDep) -> JarvisOutput:
    return await tutor.ask_jarvis(payload, llm=llm)


@router.post("/solve-problem", response_model=SolveProblemOutput, response_model_exclude_none=True)
async def solve_problem(payload: SolveProblemInput, llm: LLMDep) -> SolveProblemOutput:
    return await tutor.solve_problem(payload, llm=llm)


@router.post("/summarize", response_model=SummarizeTextOutput, response_model_exclude_none=True)
async def summarize_text(payload: SummarizeTextInput, llm: LLMDep) -> SummarizeTextOutput:
    return await tutor.summarize_text(payload, llm=llm)


@router.post("/chapter-notes", response_model=NotesByChapterOutput, response_model_exclude_none=True)
async def generate_notes_by_chapter(payload: NotesByChapterInput, llm: LLMDep) -> NotesByChapterOutput:
    return await tutor.generate_notes_by_chapter(payload, llm=llm)


# --- media & account ------------------------------------------------------------


@router.post("/avatar", response_model=AvatarOutput)
async def generate_avatar(payload: AvatarInput, llm: LLMDep) -> AvatarOutput:
    return await media.generate_avatar(payload, llm=llm)


@router.post("/voice-chat", response_model=VoiceChatOutput)
async def voice_chat(payload: VoiceChatInput, llm: LLMDep) -> VoiceChatOutput:
    return await media.voice_chat(payload, llm=llm)


@router.post("/username-check", response_model=UsernameCheckOutput)
async def check_username(
    payload: UsernameCheckInput, llm: LLMDep, directory: UsernameDirectoryDep
) -> UsernameCheckOutput:
    return await username.check_username(payload, directory=directory, llm=llm)
