from mgqs.flows.templating import PromptTemplate

PRACTICE_SYSTEM_PROMPT = """
You are a helpful AI that creates practice questions and answers for school students following the NCERT syllabus.
Questions must be relevant to the requested chapter and suitable for the requested grade level.
""".strip()

GENERATE_QUESTIONS_TEMPLATE = PromptTemplate("""
Generate exactly {{number_of_questions}} questions of type "{{question_type}}" for grade {{grade_level}}, subject "{{subject}}", chapter "{{chapter}}".
For each question, provide a concise and accurate answer.
Return the questions and answers as a JSON object with a "questions" array, where each item has a "question" field and an "answer" field.
{{#if has_options}}
Each item MUST also have an "options" field: an array of exactly 4 distinct string options.
The "answer" MUST be the exact text of one of those 4 options.
{{/if}}
{{#if is_assertion_reason}}
Each "question" MUST contain both an assertion and a reason, formatted exactly as: "Assertion (A): [statement]\\nReason (R): [statement]".
The "options" MUST be exactly these four strings:
{{#each assertion_reason_options}}
    - "{{this}}"
{{/each}}
{{/if}}
{{#if is_true_false}}
Each item MUST also have an "options" field equal to ["True", "False"], and the "answer" MUST be exactly "True" or "False".
{{/if}}
If you cannot generate the exact number of questions requested, generate as many as you can up to that number.
""")

CHAPTER_MCQ_TEMPLATE = PromptTemplate("""
Generate exactly {{number_of_questions}} multiple-choice questions of {{difficulty}} difficulty for a Class {{grade_level}} student.
Subject: "{{subject}}". Chapter: "{{chapter}}".

For each question you MUST provide:
- "question": the question text.
- "options": an array of exactly 4 distinct string options.
- "answer": the single correct answer, which must exactly match one of the four options.
- "explanation": one or two sentences explaining why the answer is correct.
- "difficulty": "{{difficulty}}".
""")

DOUBT_TO_MCQ_SYSTEM_PROMPT = """
You are an expert educator who excels at creating practice questions to help students solidify their understanding.
""".strip()

DOUBT_TO_MCQ_TEMPLATE = PromptTemplate("""
A student has provided a doubt, a concept, or a topic they are confused about. Generate 3-5 high-quality Multiple Choice Questions (MCQs) directly related to their input. The questions should test their understanding and help them overcome their confusion.

For each question, you MUST adhere to the following structure:
- "question": The question text.
- "options": An array of exactly 4 distinct string options.
- "answer": The single correct answer, which must exactly match one of the four options.

Student's doubt/topic: "{{doubt}}"
""")

REGENERATE_SYSTEM_PROMPT = """
You are an expert teacher specializing in creating NCERT textbook questions and answers for classes 9-12.
""".strip()

REGENERATE_QUESTION_TEMPLATE = PromptTemplate("""
Generate a NEW question of type "{{question_type}}" and its answer for grade level "{{grade_level}}", subject "{{subject}}", and chapter "{{chapter}}".

The original question was: "{{original_question}}"
{{#if original_options}}
The original options were:
{{#each original_options}}
- {{this}}
{{/each}}
{{/if}}

The new question must be substantially different from the original, testing a different aspect of the same concept if possible, while staying on topic.

{{#if is_multiple_choice}}
- You MUST provide "regenerated_options", an array of 4 distinct string options.
- "regenerated_answer" MUST be the exact text of one of these 4 options.
{{/if}}
{{#if is_assertion_reason}}
- "regenerated_question" MUST contain both an assertion and a reason, formatted exactly as: "Assertion (A): [statement]\\nReason (R): [statement]".
- "regenerated_options" MUST be exactly these four strings:
{{#each assertion_reason_options}}
    - "{{this}}"
{{/each}}
- "regenerated_answer" MUST be the exact text of one of those four options.
{{/if}}
{{#unless has_options}}
- Omit "regenerated_options" or return an empty array.
{{/unless}}

Provide a concise and accurate answer for the new question.
""")

IMAGE_QUESTIONS_SYSTEM_PROMPT = """
You are an expert educator who creates practice questions from study material photographed by students.
""".strip()

IMAGE_QUESTIONS_TEMPLATE = PromptTemplate("""
The user has uploaded one or more images of their notes or textbook pages.

Your tasks:
1. Analyze the content: read all text in the provided image(s) and understand it.
{{#each image_data_uris}}
   {{media url=this}}
{{/each}}
2. Detect language: determine the primary language of the text (e.g., English, Hindi, Assamese).
3. Generate questions of the following types: {{#each question_types}}{{this}}{{#unless @last}}, {{/unless}}{{/each}}.
{{#if is_comprehensive}}
   This is a COMPREHENSIVE request. Generate enough questions to thoroughly test all key concepts found in the material.
{{else}}
   Generate exactly {{number_of_questions}} questions in total, distributed among the requested types.
{{/if}}

Output rules:
- ALL parts of the response (questions, options, answers, explanations, language name) MUST be in the auto-detected language.
- For each question, provide "type", "question", "answer", "explanation", and the detected "language".
- For "multiple_choice" or "assertion_reason" questions, provide an "options" array with 4 distinct options.
- For "true_false", the "options" array MUST be ["True", "False"].
- For other types, omit "options".
""")
