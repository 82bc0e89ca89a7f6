import base64
import json
import logging
import re
from typing import TypeVar

import openai
from openai import AsyncOpenAI
from pydantic import BaseModel, ValidationError

from mgqs.core.config import settings
from mgqs.flows.errors import InvocationError
from mgqs.flows.templating import PromptPayload

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

OVERLOAD_STATUS_CODES = {429, 500, 502, 503, 504, 529}


def _extract_fenced_block(text: str) -> str | None:
    blocks = re.findall(r"```(?:json)?\s*(.*?)\s*```", text, re.DOTALL | re.IGNORECASE)
    return blocks[0].strip() if blocks else None


def _strip_code_fences(text: str) -> str:
    if not text:
        return ""
    fenced = re.match(r"^\s*```[a-zA-Z0-9_-]*\s*([\s\S]*?)\s*```\s*$", text)
    if fenced:
        return fenced.group(1).strip()
    return text.strip()


def _extract_balanced_json_span(text: str) -> str | None:
    """Best-effort extraction of the first balanced top-level JSON object/array."""
    if not text:
        return None

    starts = []
    first_obj = text.find("{")
    first_arr = text.find("[")
    if first_obj != -1:
        starts.append((first_obj, "{", "}"))
    if first_arr != -1:
        starts.append((first_arr, "[", "]"))
    if not starts:
        return None

    start_idx, open_ch, close_ch = min(starts, key=lambda x: x[0])
    depth = 0
    in_string = False
    escape = False
    for i in range(start_idx, len(text)):
        ch = text[i]
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == open_ch:
            depth += 1
        elif ch == close_ch:
            depth -= 1
            if depth == 0:
                return text[start_idx:i + 1]
    return None


def _structured_text_candidates(raw_text: str) -> list[str]:
    text = (raw_text or "").strip()
    if not text:
        return []

    candidates: list[str] = []
    fenced = _extract_fenced_block(text)
    if fenced:
        candidates.append(fenced)

    candidates.append(text)

    balanced = _extract_balanced_json_span(text)
    if balanced:
        candidates.append(balanced)

    # Remove leading "json" token some models emit before the object.
    if text.lower().startswith("json"):
        trimmed = text[4:].lstrip(": \n\r\t")
        if trimmed:
            candidates.append(trimmed)
            balanced_trimmed = _extract_balanced_json_span(trimmed)
            if balanced_trimmed:
                candidates.append(balanced_trimmed)

    # Deduplicate while preserving order.
    seen = set()
    unique: list[str] = []
    for candidate in candidates:
        c = candidate.strip()
        if not c or c in seen:
            continue
        seen.add(c)
        unique.append(c)
    return unique


def classify_provider_error(exc: Exception) -> InvocationError:
    """Map an SDK exception onto the adapter's failure kinds."""
    if isinstance(exc, openai.APIConnectionError):
        # Also covers APITimeoutError.
        return InvocationError("transport", f"Connection to provider failed: {exc}", retryable=True)
    if isinstance(exc, (openai.RateLimitError, openai.InternalServerError)):
        return InvocationError("overloaded", f"Provider overloaded: {exc}")
    if isinstance(exc, openai.APIStatusError):
        if exc.status_code in OVERLOAD_STATUS_CODES:
            return InvocationError("overloaded", f"Provider unavailable ({exc.status_code}): {exc}")
        return InvocationError(
            "transport", f"Provider rejected request ({exc.status_code}): {exc}", retryable=False
        )
    if isinstance(exc, openai.OpenAIError):
        return InvocationError("transport", f"Provider error: {exc}", retryable=False)
    raise exc


def build_user_content(payload: PromptPayload) -> str | list[dict]:
    """Rendered text first, then every attachment in its original order."""
    if not payload.media:
        return payload.text
    content: list[dict] = [{"type": "text", "text": payload.text}]
    for attachment in payload.media:
        content.append({"type": "image_url", "image_url": {"url": attachment.url}})
    return content


class LLMClient:
    """
    Provider-agnostic LLM client using the OpenAI API format.
    Makes exactly one attempt per call; retry policy belongs to the caller.
    """

    def __init__(
        self,
        model_name: str | None = None,
        base_url: str | None = None,
        api_key: str | None = None,
    ):
        self.model_name = model_name or settings.MODEL_DEFAULT

        # Use LLM_API_KEY or fallback to GEMINI_API_KEY if they only provided the original one
        resolved_api_key = api_key or settings.LLM_API_KEY or settings.GEMINI_API_KEY
        resolved_base_url = base_url or settings.LLM_BASE_URL

        self.client = AsyncOpenAI(
            base_url=resolved_base_url,
            api_key=resolved_api_key,
            max_retries=settings.LLM_MAX_RETRIES,
            timeout=settings.LLM_TIMEOUT_SECONDS,
        )

    def _chat_completion_kwargs(self, *, temperature: float | None) -> dict:
        """Build provider/model-compatible kwargs for chat completions."""
        model_name = (self.model_name or "").lower()
        # GPT-5 family rejects non-default temperature values in some OpenAI endpoints.
        if model_name.startswith("gpt-5"):
            return {}
        if temperature is None:
            return {}
        return {"temperature": temperature}

    async def _complete(self, messages: list[dict], *, temperature: float | None) -> str:
        try:
            response = await self.client.chat.completions.create(
                model=self.model_name,
                messages=messages,
                **self._chat_completion_kwargs(temperature=temperature),
            )
        except openai.OpenAIError as exc:
            error = classify_provider_error(exc)
            logger.error("Model %s call failed (%s): %s", self.model_name, error.kind, exc)
            raise error from exc

        if not getattr(response, "choices", None):
            logger.error("Received 0 choices from %s: %s", self.model_name, response)
            raise InvocationError("empty", f"Provider {self.model_name} returned no output.")
        return (response.choices[0].message.content or "").strip()

    async def generate_structured(
        self,
        system_prompt: str,
        payload: PromptPayload,
        response_schema: type[T],
        *,
        temperature: float | None = 0.2,
    ) -> T:
        """
        Generate a structured response matching the provided Pydantic schema.
        The schema is injected into the system prompt; image attachments travel as
        `image_url` parts after the rendered text.
        """
        schema_json = json.dumps(response_schema.model_json_schema())
        augmented_system_prompt = (
            f"{system_prompt}\n\n"
            "CRITICAL: You must respond in ONLY valid JSON format matching the following JSON Schema. "
            "Do not include markdown code blocks (```json) or any conversational text around the JSON.\n\n"
            f"EXPECTED SCHEMA:\n{schema_json}"
        )

        logger.info(
            "Issuing structured request to model %s (%s attachment(s))...",
            self.model_name,
            len(payload.media),
        )
        text_response = await self._complete(
            [
                {"role": "system", "content": augmented_system_prompt},
                {"role": "user", "content": build_user_content(payload)},
            ],
            temperature=temperature,
        )

        parse_candidates = _structured_text_candidates(text_response)
        if not parse_candidates:
            raise InvocationError("empty", "Model returned empty content for structured response")

        parse_errors: list[str] = []
        for candidate in parse_candidates:
            try:
                parsed_data = json.loads(candidate, strict=False)
                result = response_schema.model_validate(parsed_data)
            except (json.JSONDecodeError, ValidationError, ValueError) as candidate_error:
                parse_errors.append(str(candidate_error))
                continue
            logger.info("Successfully received structured response from %s.", self.model_name)
            return result

        logger.error("Error parsing structured LLM response from %s: %s", self.model_name, parse_errors[:1])
        raise InvocationError(
            "malformed",
            "Unable to parse structured response after candidate extraction: "
            + " | ".join(parse_errors[:3]),
        )

    async def generate_text(self, system_prompt: str, user_prompt: str, *, temperature: float = 0.2) -> str:
        """Generate plain text, removing markdown code fences if the model wraps the response."""
        logger.info("Issuing text request to model %s...", self.model_name)
        text_response = _strip_code_fences(
            await self._complete(
                [
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=temperature,
            )
        )
        if not text_response:
            raise InvocationError("empty", "Model returned empty content")
        return text_response

    async def generate_image(self, prompt: str, *, model_name: str | None = None) -> str:
        """Return the first generated image as a PNG data URI."""
        model = model_name or settings.MODEL_IMAGE
        try:
            response = await self.client.images.generate(
                model=model,
                prompt=prompt,
                n=1,
                response_format="b64_json",
            )
        except openai.OpenAIError as exc:
            error = classify_provider_error(exc)
            logger.error("Image model %s call failed (%s): %s", model, error.kind, exc)
            raise error from exc

        data = getattr(response, "data", None) or []
        encoded = getattr(data[0], "b64_json", None) if data else None
        if not encoded:
            raise InvocationError("empty", f"Image model {model} returned no image.")
        return f"data:image/png;base64,{encoded}"

    async def synthesize_speech(
        self, text: str, *, model_name: str | None = None, voice: str | None = None
    ) -> str:
        """Return spoken `text` as a WAV data URI."""
        model = model_name or settings.MODEL_TTS
        try:
            response = await self.client.audio.speech.create(
                model=model,
                voice=voice or settings.TTS_VOICE,
                input=text,
                response_format="wav",
            )
        except openai.OpenAIError as exc:
            error = classify_provider_error(exc)
            logger.error("Speech model %s call failed (%s): %s", model, error.kind, exc)
            raise error from exc

        audio = getattr(response, "content", b"") or b""
        if not audio:
            raise InvocationError("empty", f"Speech model {model} returned no audio.")
        return "data:audio/wav;base64," + base64.b64encode(audio).decode("ascii")
