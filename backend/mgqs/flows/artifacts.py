from typing import Annotated, Literal

from pydantic import BaseModel, Field, StringConstraints, model_validator

GradeLevel = Literal["5", "6", "7", "8", "9", "10", "11", "12"]
SeniorGradeLevel = Literal["9", "10", "11", "12"]
Difficulty = Literal["easy", "medium", "hard"]
Medium = Literal["english", "hindi", "assamese"]
QuestionType = Literal[
    "multiple_choice",
    "assertion_reason",
    "short_answer",
    "long_answer",
    "fill_in_the_blanks",
    "true_false",
]
StreamId = Literal[
    "jee",
    "neet",
    "upsc",
    "mbbs",
    "clat",
    "ssc",
    "banking",
    "nda",
    "ca-foundation",
    "cuet",
    "btech",
    "iti-polytechnic",
]

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
ImageDataUri = Annotated[
    str, StringConstraints(strip_whitespace=True, pattern=r"^data:image/[\w.+-]+;base64,")
]
QuestionCount = Annotated[int, Field(gt=0, le=50)]

ASSERTION_REASON_OPTIONS = [
    "Both A and R are true, and R is the correct explanation of A",
    "Both A and R are true, but R is not the correct explanation of A",
    "A is true, but R is false",
    "A is false, but R is true",
]


class ConversationTurn(BaseModel):
    speaker: Literal["user", "ai"] = Field(description="Who previously spoke.")
    text: NonEmptyStr = Field(description="The text of the previous turn.")


class TermDefinition(BaseModel):
    term: str = Field(description="The key term or vocabulary word.")
    definition: str = Field(description="The definition of the term.")


class QuestionAnswerPair(BaseModel):
    question: str = Field(description="The generated question.")
    answer: str = Field(description="The answer to the generated question.")
    options: list[str] | None = Field(
        default=None, description="Answer options, only for choice-style questions."
    )


class McqQuestion(BaseModel):
    question: str = Field(description="The multiple-choice question text.")
    options: list[str] = Field(description="Exactly 4 distinct string options.")
    answer: str = Field(description="The correct answer; must exactly match one of the options.")
    explanation: str | None = Field(default=None, description="Why the answer is correct.")
    difficulty: Difficulty | None = None


class ComprehensiveRequest(BaseModel):
    """Shared rule: either a comprehensive set or an explicit question count."""

    is_comprehensive: bool = False
    number_of_questions: QuestionCount | None = None

    @model_validator(mode="after")
    def _require_count_unless_comprehensive(self):
        if not self.is_comprehensive and self.number_of_questions is None:
            raise ValueError("number_of_questions is required unless is_comprehensive is set")
        return self


# --- practice questions -------------------------------------------------------


class GenerateQuestionsInput(BaseModel):
    grade_level: GradeLevel
    subject: NonEmptyStr
    chapter: NonEmptyStr
    question_type: QuestionType
    number_of_questions: QuestionCount


class GenerateQuestionsOutput(BaseModel):
    questions: list[QuestionAnswerPair] = Field(
        description="An array of generated question-answer pairs."
    )


class ChapterMcqInput(BaseModel):
    grade_level: GradeLevel
    subject: NonEmptyStr
    chapter: NonEmptyStr
    number_of_questions: QuestionCount
    difficulty: Difficulty = "medium"


class McqSetOutput(BaseModel):
    questions: list[McqQuestion] = Field(description="The generated multiple-choice questions.")


class DoubtToMcqInput(BaseModel):
    doubt: NonEmptyStr = Field(description="The user's doubt, concept, or topic.")


class DoubtToMcqOutput(BaseModel):
    questions: list[McqQuestion] = Field(description="An array of 3-5 generated multiple-choice questions.")


class RegenerateQuestionInput(BaseModel):
    grade_level: SeniorGradeLevel
    subject: NonEmptyStr
    chapter: NonEmptyStr
    question_type: QuestionType
    original_question: NonEmptyStr
    original_options: list[str] | None = None


class RegenerateQuestionOutput(BaseModel):
    regenerated_question: str = Field(description="The regenerated question.")
    regenerated_options: list[str] | None = Field(
        default=None,
        description="4 options for multiple_choice / assertion_reason questions, otherwise omitted.",
    )
    regenerated_answer: str = Field(
        description="The answer; for choice questions, the exact text of one of the options."
    )


class ImageQuestion(BaseModel):
    type: QuestionType
    question: str
    options: list[str] | None = None
    answer: str
    explanation: str
    language: str = Field(description="The auto-detected language of the source material.")


class QuestionsFromImageInput(ComprehensiveRequest):
    image_data_uris: list[ImageDataUri] = Field(min_length=1, max_length=10)
    question_types: list[QuestionType] = Field(min_length=1)


class QuestionsFromImageOutput(BaseModel):
    questions: list[ImageQuestion]


# --- assessments ----------------------------------------------------------------


class MockTestInput(BaseModel):
    grade_level: GradeLevel
    subject: NonEmptyStr
    chapters: NonEmptyStr = Field(description="A comma-separated list of chapter names.")
    number_of_questions: QuestionCount


class MockTestQuestion(BaseModel):
    type: Literal["multiple_choice", "true_false"]
    text: str = Field(description="The question text itself.")
    options: list[str] | None = Field(
        default=None,
        description='4 strings for "multiple_choice", or ["True", "False"] for "true_false".',
    )
    answer: str


class MockTestOutput(BaseModel):
    questions: list[MockTestQuestion]


GrammarQuestionType = Literal["multiple_choice", "true_false", "direct_answer"]


class GrammarTestInput(BaseModel):
    grade_level: GradeLevel
    topic: NonEmptyStr
    question_type: GrammarQuestionType
    number_of_questions: QuestionCount


class GrammarTestQuestion(BaseModel):
    type: GrammarQuestionType
    text: str
    options: list[str] | None = None
    answer: str


class GrammarTestOutput(BaseModel):
    questions: list[GrammarTestQuestion]


class FlashcardsInput(BaseModel):
    grade_level: GradeLevel
    subject: NonEmptyStr
    chapter: NonEmptyStr
    number_of_cards: QuestionCount


class Flashcard(BaseModel):
    front: str = Field(description="A key term, concept, or question.")
    back: str = Field(description="A clear and concise definition or answer.")


class FlashcardsOutput(BaseModel):
    flashcards: list[Flashcard]


class RecheckAnswerInput(BaseModel):
    grade_level: GradeLevel
    subject: NonEmptyStr
    chapter: NonEmptyStr
    question: NonEmptyStr
    original_answer: NonEmptyStr


class RecheckAnswerOutput(BaseModel):
    is_correct: bool
    correct_answer: str
    explanation: str


# --- exams ----------------------------------------------------------------------


class BoardQuestionsInput(ComprehensiveRequest):
    board_name: NonEmptyStr
    class_name: NonEmptyStr
    subject: NonEmptyStr
    chapters: NonEmptyStr
    question_types: list[NonEmptyStr] = Field(min_length=1)
    medium: Medium = "english"


class BoardQuestion(BaseModel):
    type: str
    question: str
    options: list[str] | None = None
    answer: str
    marks: int = Field(ge=1)
    explanation: str
    is_likely_to_appear: bool


class BoardQuestionsOutput(BaseModel):
    questions: list[BoardQuestion]


class NeetQuestionsInput(ComprehensiveRequest):
    class_level: Literal["11", "12"]
    subject: NonEmptyStr
    chapter: NonEmptyStr


class NeetQuestion(BaseModel):
    type: Literal["mcq", "assertion_reason", "numerical"]
    text: str
    options: list[str] | None = None
    answer: str
    explanation: str
    difficulty: Difficulty


class NeetQuestionsOutput(BaseModel):
    questions: list[NeetQuestion]


class StreamQuestionsInput(ComprehensiveRequest):
    stream_id: StreamId
    stream_name: NonEmptyStr
    level: NonEmptyStr
    subject: NonEmptyStr
    chapter: NonEmptyStr


class StreamQuestion(BaseModel):
    type: str = Field(description="e.g. mcq, numerical, integer, assertion_reason, case_based_mcq.")
    text: str
    options: list[str] | None = None
    answer: str
    explanation: str
    difficulty: Difficulty


class StreamQuestionsOutput(BaseModel):
    questions: list[StreamQuestion]


# --- tutoring -------------------------------------------------------------------


class GrammarQuestionInput(BaseModel):
    user_question: NonEmptyStr


class GrammarQuestionOutput(BaseModel):
    ai_answer: str = Field(description="The answer, with explanations and examples if relevant.")


class SubjectQuestionInput(BaseModel):
    grade_level: GradeLevel
    subject: NonEmptyStr
    chapter: NonEmptyStr
    user_question: NonEmptyStr
    conversation_history: list[ConversationTurn] | None = None


class SubjectQuestionOutput(BaseModel):
    ai_answer: str


class JarvisInput(BaseModel):
    user_question: NonEmptyStr
    conversation_history: list[ConversationTurn] | None = None


class JarvisOutput(BaseModel):
    jarvis_answer: str


class SolveProblemInput(BaseModel):
    user_question: str | None = None
    image_data_uri: ImageDataUri | None = None
    subject: str | None = None
    grade_level: GradeLevel | None = None
    medium: Medium = "english"
    request_hint: bool = False

    @model_validator(mode="after")
    def _require_question_or_image(self):
        if not (self.user_question or "").strip() and not self.image_data_uri:
            raise ValueError("Provide a typed question, an image, or both")
        return self


class SolutionStep(BaseModel):
    step_number: int = Field(ge=1)
    explanation: str


class SolveProblemOutput(BaseModel):
    is_solvable: bool
    clarification_needed: str | None = None
    hint: str | None = None
    steps: list[SolutionStep] | None = None
    final_answer: str | None = None


class SummarizeTextInput(BaseModel):
    text_to_summarize: NonEmptyStr


class SummarizeTextOutput(BaseModel):
    summary: str = Field(description="A clear, simplified explanation of the provided text.")
    bullet_points: list[str] = Field(description="Key points from the text.")
    definitions: list[TermDefinition] | None = Field(
        default=None, description="Definitions of difficult words or formulas found in the text."
    )


class NotesByChapterInput(BaseModel):
    grade_level: GradeLevel
    subject: NonEmptyStr
    chapter: NonEmptyStr


class NotesByChapterOutput(BaseModel):
    summary: str = Field(description="A concise summary of the chapter.")
    key_terms: list[TermDefinition] = Field(default_factory=list)
    main_points: list[str] = Field(default_factory=list)
    sample_questions: list[QuestionAnswerPair] = Field(
        default_factory=list, description="2-3 sample questions with answers."
    )


# --- media ----------------------------------------------------------------------


class AvatarInput(BaseModel):
    full_name: NonEmptyStr


class AvatarOutput(BaseModel):
    avatar_data_uri: str = Field(description="data:image/png;base64,<encoded_data>")


class VoiceChatInput(BaseModel):
    query: NonEmptyStr


class VoiceChatOutput(BaseModel):
    text_response: str
    audio_response: str = Field(description="Base64-encoded WAV data URI.")


# --- account --------------------------------------------------------------------


class UsernameCheckInput(BaseModel):
    username: str = Field(description="The username chosen by the user.")
    full_name: str | None = None
    email: str | None = None
    existing_usernames: list[str] = Field(default_factory=list)


class UsernameSuggestions(BaseModel):
    suggestions: list[str] = Field(description="A list of alternative username suggestions.")


class UsernameCheckOutput(BaseModel):
    status: Literal["available", "invalid", "taken"]
    message: str
    suggestions: list[str] = Field(default_factory=list)
