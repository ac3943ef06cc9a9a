"""
Writing assistant backed by OpenAI chat completions.

Used by the journaling app to suggest improved versions of an entry and to
caption photo entries.
"""

import json
import logging
from typing import Any, Dict, List, Optional

import openai

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-3.5-turbo"
VERSION_SEPARATOR = "---VERSION---"

IMPROVE_TEXT_SYSTEM_PROMPT = (
    "You are a compassionate journaling assistant. The user has written a personal journal entry. "
    "Please provide 2-3 improved versions that preserve the user's authentic voice and emotions, "
    "enhance clarity and flow, keep the same meaning and tone, and make it more reflective and meaningful."
)
CAPTION_SYSTEM_PROMPT = (
    "You are a creative caption generator for journal entries. "
    "Create engaging, reflective captions that capture the essence of the moment."
)


class WritingAssistantError(Exception):
    pass


def split_versions(content: Optional[str], original_text: str) -> List[str]:
    versions = [v.strip() for v in (content or "").split(VERSION_SEPARATOR)]
    versions = [v for v in versions if v]
    return versions if versions else [original_text]


class WritingAssistant:
    """Thin wrapper over an AsyncOpenAI client. One completion request per call."""

    def __init__(self, api_key: str = "", model: str = DEFAULT_MODEL, client: Optional[Any] = None):
        self.model = model
        if client is not None:
            self._client = client
        elif api_key:
            self._client = openai.AsyncOpenAI(api_key=api_key)
        else:
            logger.warning("OpenAI API key not configured. AI endpoints will fail.")
            self._client = None

    async def _complete(self, system_prompt: str, user_message: str, max_tokens: int, temperature: float) -> str:
        if self._client is None:
            raise WritingAssistantError("OpenAI API key not configured")

        try:
            completion = await self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_message},
                ],
                max_tokens=max_tokens,
                temperature=temperature,
            )
            return completion.choices[0].message.content or ""
        except openai.OpenAIError as e:
            raise WritingAssistantError(str(e)) from e
        except (IndexError, AttributeError) as e:
            raise WritingAssistantError("Malformed completion response") from e

    async def improve_text(self, text: str) -> List[str]:
        user_message = (
            f'Original entry: "{text}"\n\n'
            f'Provide only the improved versions, separated by "{VERSION_SEPARATOR}", without any additional commentary.'
        )
        content = await self._complete(IMPROVE_TEXT_SYSTEM_PROMPT, user_message, max_tokens=500, temperature=0.7)
        return split_versions(content, text)

    async def generate_caption(self, description: Optional[str], metadata: Optional[Dict[str, Any]]) -> str:
        user_message = f'Generate a caption for: "{description}"\n\nMetadata: {json.dumps(metadata)}'
        content = await self._complete(CAPTION_SYSTEM_PROMPT, user_message, max_tokens=100, temperature=0.8)
        return content.strip()
