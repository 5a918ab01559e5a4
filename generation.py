from __future__ import annotations

import os
from functools import lru_cache
from typing import Any, Optional, Type, TypeVar

from google import genai
from google.genai import types
from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from errors import GenerationError

GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

M = TypeVar("M", bound=BaseModel)


class GenerationService:
    """
    Thin wrapper over the Gemini text-completion API.

    Every call is single-turn: no history is carried between calls. Any upstream
    failure, empty completion, or schema mismatch is raised as GenerationError.
    """

    def __init__(
        self,
        api_key: str = GOOGLE_API_KEY,
        model: str = GEMINI_MODEL,
        client: Optional[Any] = None,
    ):
        self.api_key = api_key
        self.model = model
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            if not self.api_key:
                raise GenerationError("GOOGLE_API_KEY environment variable is not set.")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def _generate(self, prompt: str, config: Optional[types.GenerateContentConfig] = None) -> str:
        client = self.client
        try:
            response = client.models.generate_content(
                model=self.model, contents=prompt, config=config
            )
            text = (response.text or "").strip()
        except Exception as e:
            raise GenerationError(f"gemini_error: {type(e).__name__}: {e}") from e
        if not text:
            raise GenerationError("gemini returned an empty completion")
        return text

    def generate_text(self, prompt: str) -> str:
        return self._generate(prompt)

    def generate_json(
        self, prompt: str, schema: Type[M], system_instruction: Optional[str] = None
    ) -> M:
        config = types.GenerateContentConfig(
            system_instruction=system_instruction,
            response_mime_type="application/json",
            response_schema=schema,
        )
        text = self._generate(prompt, config)
        try:
            return schema.model_validate_json(text)
        except SchemaError as e:
            raise GenerationError(f"response does not match {schema.__name__}: {e}") from e


@lru_cache(maxsize=1)
def get_generation_service() -> GenerationService:
    # The client itself is created on first use so a missing key only fails the calls that need it.
    return GenerationService()
