import json
import logging
import re
from typing import Any, TypeVar
from openai import APIError, OpenAI
from openai.types.chat import (
    ChatCompletionMessageParam,
    ChatCompletionSystemMessageParam,
    ChatCompletionUserMessageParam,
)
from pydantic import TypeAdapter, ValidationError

from src.common.exceptions import KnownException
from src.generation.exceptions import GenerationException
from src.llm_providers.exceptions import handle_openai_client_error

logger = logging.getLogger(__name__)

T = TypeVar("T")

CODE_FENCE_PATTERN = re.compile(r"^\s*```(?:\w+)?\s*\n?(.*?)\n?\s*```\s*$", re.DOTALL)


def strip_code_fences(text: str) -> str:
    match = CODE_FENCE_PATTERN.match(text)
    if match:
        return match.group(1).strip()
    return text.strip()


class GenerationService:
    def __init__(self, *, openai_client: OpenAI, model: str):
        self.chat_client = openai_client
        self.model = model

    def _create_chat_messages(
        self, prompt: str, system_instruction: str | None
    ) -> list[ChatCompletionMessageParam]:
        messages: list[ChatCompletionMessageParam] = []
        if system_instruction:
            messages.append(
                ChatCompletionSystemMessageParam(
                    role="system", content=system_instruction
                )
            )
        messages.append(ChatCompletionUserMessageParam(role="user", content=prompt))
        return messages

    def _complete(self, prompt: str, system_instruction: str | None) -> str:
        try:
            response = self.chat_client.chat.completions.create(
                model=self.model,
                messages=self._create_chat_messages(prompt, system_instruction),
            )
        except APIError as e:
            handle_openai_client_error(e, self.model)
            raise e

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            raise KnownException("The model returned an empty response.")
        return content

    def generate_text(self, prompt: str, system_instruction: str | None = None) -> str:
        return self._complete(prompt, system_instruction)

    def generate_text_with_context(
        self, prompt: str, context: str, system_instruction: str | None = None
    ) -> str:
        """Generate text grounded on a block of retrieved knowledge base context."""
        return self._complete(f"{context}\n\n{prompt}", system_instruction)

    def generate_json(
        self,
        prompt: str,
        system_instruction: str | None,
        response_type: type[T],
    ) -> T:
        raw_text = self._complete(prompt, system_instruction)
        json_text = strip_code_fences(raw_text)

        try:
            data: Any = json.loads(json_text)
            return TypeAdapter(response_type).validate_python(data)
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error(f"Failed to parse model output as JSON: {e}")
            raise GenerationException(
                f"Failed to parse JSON from model response. Raw output: {raw_text}",
                raw_text=raw_text,
            ) from e
