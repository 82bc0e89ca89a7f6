from mgqs.flows.templating import PromptTemplate

TEST_SETTER_SYSTEM_PROMPT = """
You are an expert test creator for school students. Questions must be relevant to the requested material
and appropriately challenging for the requested grade level.
""".strip()

MOCK_TEST_TEMPLATE = PromptTemplate("""
Generate a mock test with exactly {{number_of_questions}} questions for a Class {{grade_level}} student.
The test covers the subject "{{subject}}" and chapter(s): "{{chapters}}".

Create a random mix of two question types:
1. "multiple_choice"
2. "true_false"

Rules:
- For "multiple_choice": "options" MUST contain exactly 4 distinct strings and "answer" MUST be the exact text of one of them.
- For "true_false": "options" MUST be ["True", "False"] and "answer" MUST be either "True" or "False".
""")

GRAMMAR_TEST_SYSTEM_PROMPT = "You are an expert English grammar teacher."

GRAMMAR_TEST_TEMPLATE = PromptTemplate("""
Generate a grammar test with exactly {{number_of_questions}} questions of type "{{question_type}}" for a Class {{grade_level}} student.
The test focuses on the grammar topic: "{{topic}}".

Rules:
- For "multiple_choice": "text" holds the question, "options" MUST contain exactly 4 distinct strings, and "answer" MUST be the exact text of one option.
- For "true_false": "text" holds the statement, "options" is omitted, and "answer" MUST be "True" or "False".
- For "direct_answer": "text" asks the student to type an answer (fill a blank, correct a sentence), "options" is omitted, and "answer" holds the single correct word or phrase.
""")

FLASHCARDS_SYSTEM_PROMPT = "You are an expert educator who creates concise and effective study flashcards for students."

FLASHCARDS_TEMPLATE = PromptTemplate("""
Generate exactly {{number_of_cards}} flashcards for a Class {{grade_level}} student studying the chapter "{{chapter}}" in the subject "{{subject}}".
Each flashcard has a "front" (a key term, concept, or question) and a "back" (a clear and concise definition or answer).
Focus on the most important information from the chapter.
""")

RECHECK_SYSTEM_PROMPT = "You are an expert educator and fact-checker for the NCERT syllabus."

RECHECK_ANSWER_TEMPLATE = PromptTemplate("""
Verify an AI-generated answer for a given question.

Context:
- Grade Level: {{grade_level}}
- Subject: {{subject}}
- Chapter: {{chapter}}

Question to evaluate:
"{{question}}"

The original answer was:
"{{original_answer}}"

1. Set "is_correct" to true only if the original answer is entirely correct.
2. In "correct_answer", give the definitively correct answer (repeat the original if it was correct).
3. In "explanation", briefly justify the verdict; if the original was wrong, explain the mistake.
""")
