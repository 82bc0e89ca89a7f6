from mgqs.core.config import settings
from mgqs.flows.artifacts import AvatarInput, AvatarOutput, VoiceChatInput, VoiceChatOutput
from mgqs.flows.base import GenerationFlow
from mgqs.flows.errors import GenerationFailed, InvocationError
from mgqs.flows.llm_client import LLMClient
from mgqs.flows.prompts.account import AVATAR_PROMPT_TEMPLATE, VOICE_CHAT_SYSTEM_PROMPT, VOICE_CHAT_TEMPLATE
from mgqs.flows.templating import PromptPayload


class AvatarFlow(GenerationFlow[AvatarInput, AvatarOutput]):
    name = "generate_avatar"
    input_schema = AvatarInput
    output_schema = AvatarOutput
    template = AVATAR_PROMPT_TEMPLATE

    async def invoke(self, payload: PromptPayload, input_data: AvatarInput) -> AvatarOutput:
        try:
            data_uri = await self.llm.generate_image(payload.text)
        except InvocationError as exc:
            if exc.kind == "empty":
                raise GenerationFailed("Image generation failed to return an image.") from exc
            raise
        return AvatarOutput(avatar_data_uri=data_uri)


class VoiceChatFlow(GenerationFlow[VoiceChatInput, VoiceChatOutput]):
    """Answers in text first, then reads the answer aloud."""

    name = "voice_chat"
    input_schema = VoiceChatInput
    output_schema = VoiceChatOutput
    system_prompt = VOICE_CHAT_SYSTEM_PROMPT.format(project_name=settings.PROJECT_NAME)
    template = VOICE_CHAT_TEMPLATE

    async def invoke(self, payload: PromptPayload, input_data: VoiceChatInput) -> VoiceChatOutput:
        try:
            text_response = await self.llm.generate_text(self.system_prompt, payload.text)
        except InvocationError as exc:
            if exc.kind == "empty":
                raise GenerationFailed("Failed to get a text response from the AI.") from exc
            raise
        try:
            audio_response = await self.llm.synthesize_speech(text_response)
        except InvocationError as exc:
            if exc.kind == "empty":
                raise GenerationFailed("Failed to generate audio for the response.") from exc
            raise
        return VoiceChatOutput(text_response=text_response, audio_response=audio_response)


async def generate_avatar(input_data, *, llm: LLMClient | None = None) -> AvatarOutput:
    return await AvatarFlow(llm=llm).run(input_data)


async def voice_chat(input_data, *, llm: LLMClient | None = None) -> VoiceChatOutput:
    return await VoiceChatFlow(llm=llm).run(input_data)
