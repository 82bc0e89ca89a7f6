from mgqs.flows.templating import PromptTemplate

BOARD_SYSTEM_PROMPT = """
You are an expert question paper setter for Indian school board examinations.
Adhere strictly to the syllabus and examination pattern of the requested board.
""".strip()

BOARD_QUESTIONS_TEMPLATE = PromptTemplate("""
Generate exam-style questions for Class {{class_name}} of the {{board_name}} board, subject "{{subject}}", covering the chapter(s): {{chapters}}.
The language for all content (questions, answers, options, explanations) MUST be {{medium}}.

{{#if is_comprehensive}}
This is a COMPREHENSIVE test. Generate enough high-probability questions to thoroughly test all key aspects, definitions, and applications of the topic(s) as per the {{board_name}} blueprint.
{{else}}
Generate exactly {{number_of_questions}} questions of the types: {{question_types}}.
{{/if}}

General instructions:
- For each question provide "question", "answer", "type", "marks", "explanation", and "is_likely_to_appear".
- "question" is formatted exactly as it would appear on an exam paper.
- "answer" is correct and complete; for long-answer questions give a model answer.
- "type" MUST be one of: {{question_types}}.
- "marks" is an integer reflecting the question's weight (e.g., 1, 2, 3, 5).
- "explanation" clarifies why the answer is correct or gives a marking scheme.
- "is_likely_to_appear" is a boolean based on the question's importance and frequency in past papers.

Board-specific instructions for {{board_name}}:
- For CBSE or ICSE, include "assertion_reason" and "case_based" questions if requested.
- For case/source-based questions, put a short passage or data set in "question" followed by 1-3 sub-questions; the answer addresses all of them.
- VSA answers are a single word or one sentence; SA answers are 30-50 words; LA answers are 80-120 words and well-structured.
- For MCQ, provide an "options" array of 4 distinct strings; the answer must match one option.
""")

NEET_SYSTEM_PROMPT = """
You are an expert paper setter for the NEET medical entrance exam in India, following the NCERT syllabus.
""".strip()

NEET_QUESTIONS_TEMPLATE = PromptTemplate("""
{{#if is_comprehensive}}
Generate a COMPREHENSIVE set of NEET-pattern questions for Class {{class_level}}, subject "{{subject}}", chapter "{{chapter}}", so that a student can fully master the chapter.
Generate around 15-25 questions, depending on chapter length, covering all critical concepts, important diagrams, data, formulas, and tricky areas.
{{else}}
Generate exactly {{number_of_questions}} NEET-pattern questions for Class {{class_level}}, subject "{{subject}}", chapter "{{chapter}}".
{{/if}}

Mix the following question types, reflecting the real NEET pattern:
- "mcq": a standard multiple-choice question with a single correct answer.
- "assertion_reason": an assertion and reason style question.
- "numerical": a problem whose answer is a number (especially for Physics and Chemistry).

For each question provide:
- "type": one of "mcq", "assertion_reason", "numerical".
- "text": the question. For "assertion_reason" it MUST read "Assertion (A): [statement]\\nReason (R): [statement]".
- "options": for "mcq" and "assertion_reason", exactly 4 distinct strings (the four standard A/R options for assertion_reason); omit for "numerical".
- "answer": the single correct answer; for "mcq"/"assertion_reason" it must match an option, for "numerical" it is the number as a string.
- "explanation": why the answer is correct; for numerical problems a step-by-step solution.
- "difficulty": "easy", "medium", or "hard".
""")

STREAM_SYSTEM_PROMPT = "You are an expert paper setter for Indian competitive examinations."

STREAM_QUESTIONS_TEMPLATE = PromptTemplate("""
Generate exam-pattern questions for the {{stream_name}} exam, subject "{{subject}}", topic "{{chapter}}", academic level "{{level}}".

{{#if is_comprehensive}}
This is a COMPREHENSIVE test. Generate enough questions to thoroughly test all key aspects, definitions, applications, and nuances of the topic. Prioritize coverage over an exact count.
{{else}}
Generate exactly {{number_of_questions}} questions.
{{/if}}

General instructions:
- For each question provide "type", "text", "answer", "explanation", and "difficulty" ("easy", "medium", or "hard").
- "answer" is the single correct answer; "explanation" is clear and concise, and a step-by-step solution for numerical problems.
- For all MCQ types, provide an "options" array of 4 distinct strings; the answer must match one option.
- DO NOT generate image-based or diagram-based questions. Output must be purely text-based.

Stream-specific instructions for {{stream_name}}:
{{#if is_jee}}
- Mix "mcq", "numerical", and "integer" questions. For "numerical" and "integer", the answer is a number and "options" is omitted.
- Test deep conceptual understanding and problem-solving suitable for JEE Main/Advanced.
{{/if}}
{{#if is_neet}}
- Mix "mcq" and "assertion_reason" questions strictly based on the NCERT syllabus and the NEET pattern.
{{/if}}
{{#if is_mbbs}}
- Generate "theory_mcq" and "case_based_mcq" questions. For "case_based_mcq", "text" holds a short clinical scenario followed by the question.
- Questions are fact-based, conceptual, and test clinical reasoning.
{{/if}}
{{#if is_btech}}
- Mix "mcq" (theory) and "numerical" (problem-solving) questions based on the standard first-year AICTE syllabus.
- For "Programming in C", ask about code output, syntax errors, or logic.
{{/if}}
{{#if is_upsc}}
- Generate "mcq" and "assertion_reason" questions testing analytical skills and broad knowledge, including questions that require elimination of options.
{{/if}}
{{#if is_ssc}}
- Generate "mcq" questions across Reasoning, Quantitative Aptitude, English, and General Awareness, following the Tier-I pattern. Describe reasoning patterns in text, never with figures.
{{/if}}
{{#if is_banking}}
- Generate "mcq" questions. Describe puzzles and seating arrangements in text; focus quantitative questions on data interpretation and arithmetic.
{{/if}}
{{#if is_cuet}}
- Generate "mcq" and "assertion_reason" questions based on the NCERT syllabus; some "text" may be a short passage followed by a question on it.
{{/if}}
{{#if is_clat}}
- Generate "passage_based_mcq" questions. "text" MUST contain a short legal, logical, or current-affairs passage followed by the question.
{{/if}}
{{#if is_nda}}
- Mix "mcq" and "numerical" questions. Mathematics is formula-based and conceptual; General Ability spans science, history, geography, and current events.
{{/if}}
{{#if is_ca_foundation}}
- Generate "mcq" and "numerical" questions. Accounting and Math are often numerical; Law and Economics are theory and application MCQs.
{{/if}}
{{#if is_iti_polytechnic}}
- Generate "mcq" and "numerical" questions based on trade theory. For Engineering Drawing, ask about theory, standards, or interpretation, never about producing a drawing.
{{/if}}
""")
