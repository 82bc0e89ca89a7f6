import pytest

from mgqs.flows.errors import GenerationFailed, InvocationError, UpstreamUnavailable
from mgqs.flows.media import generate_avatar, voice_chat

PNG_URI = "data:image/png;base64,iVBORw0KGgo="
WAV_URI = "data:audio/wav;base64,UklGRg=="


@pytest.mark.asyncio
async def test_avatar_prompt_names_the_student(stub_llm):
    llm = stub_llm(image=PNG_URI)

    result = await generate_avatar({"full_name": "Priya Sharma"}, llm=llm)

    assert result.avatar_data_uri == PNG_URI
    prompt = llm.generate_image.await_args.args[0]
    assert 'a student named "Priya Sharma"' in prompt
    llm.generate_structured.assert_not_awaited()


@pytest.mark.asyncio
async def test_avatar_without_image_is_a_generation_failure(stub_llm):
    llm = stub_llm()
    llm.generate_image.side_effect = InvocationError("empty", "no image")

    with pytest.raises(GenerationFailed, match="Image generation failed to return an image."):
        await generate_avatar({"full_name": "Priya Sharma"}, llm=llm)


@pytest.mark.asyncio
async def test_voice_chat_speaks_the_text_answer(stub_llm):
    llm = stub_llm(text="Photosynthesis turns light into food.", speech=WAV_URI)

    result = await voice_chat({"query": "What is photosynthesis?"}, llm=llm)

    assert result.text_response == "Photosynthesis turns light into food."
    assert result.audio_response == WAV_URI
    system_prompt, user_prompt = llm.generate_text.await_args.args
    assert "educational app named" in system_prompt
    assert '"What is photosynthesis?"' in user_prompt
    llm.synthesize_speech.assert_awaited_once_with("Photosynthesis turns light into food.")


@pytest.mark.asyncio
async def test_voice_chat_reports_unreachable_speech_provider(stub_llm):
    llm = stub_llm(text="Hello!")
    llm.synthesize_speech.side_effect = InvocationError("transport", "connection reset", retryable=True)

    with pytest.raises(UpstreamUnavailable) as exc_info:
        await voice_chat({"query": "Say hello"}, llm=llm)

    assert exc_info.value.retryable is True
