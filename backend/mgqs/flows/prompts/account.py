from mgqs.flows.templating import PromptTemplate

USERNAME_SYSTEM_PROMPT = "You are an account assistant for a friendly educational app."

USERNAME_SUGGESTION_TEMPLATE = PromptTemplate("""
A user wants the username "{{username}}", but it is already taken.
{{#if full_name}}The user's full name is "{{full_name}}".{{/if}}
{{#if email}}The user's email is "{{email}}".{{/if}}
{{#if existing_usernames}}
These usernames are also taken and must not be suggested: {{#each existing_usernames}}{{this}}{{#unless @last}}, {{/unless}}{{/each}}.
{{/if}}

Generate 4 unique, creative, and appropriate alternative usernames.
Usernames must be between 3-20 characters long and may only contain lowercase letters (a-z), numbers (0-9), and underscores (_).
Put them in the "suggestions" field.
""")

AVATAR_PROMPT_TEMPLATE = PromptTemplate("""
Generate an abstract, minimalist, and colorful avatar representing a student named "{{full_name}}". The style should be modern, clean, and suitable for a profile picture. Avoid using any text. The output should be a square image.
""")

VOICE_CHAT_SYSTEM_PROMPT = """
You are a helpful AI assistant in an educational app named {project_name}.
Answer the user's query clearly and concisely; your answer will be read aloud.
""".strip()

VOICE_CHAT_TEMPLATE = PromptTemplate("""
User query: "{{query}}"
""")
