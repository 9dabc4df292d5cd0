"""
Mentor Buddy AI engine: persona prompt plus the LLM capability.

- 'ChatModel' is what the orchestrator talks to: ordered role/content
  messages in, first candidate text out (None when there is nothing usable).
- 'GeminiChatModel' is the real backend on google-generativeai. The system
  entry goes in as system_instruction, the rest as chat contents.
"""
from abc import ABC, abstractmethod
from typing import Literal

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
from loguru import logger
from pydantic import BaseModel

from mentor_buddy.core.config import (
    get_gemini_api_key,
    get_gemini_model,
    get_max_output_tokens,
    get_temperature,
)

CAREER_SYSTEM_PROMPT = """You are AI Mentor Buddy, a specialized assistant focused on helping people with their career development and professional growth. Your expertise includes:

- Career exploration and path planning
- Skills assessment and development recommendations
- Industry insights and job market trends
- Interview preparation and resume guidance
- Professional networking advice
- Education and certification recommendations
- Work-life balance and career transitions

Always provide actionable, personalized advice. Ask follow-up questions to better understand the user's situation, goals, and preferences. Be encouraging and supportive while being realistic about career challenges and opportunities.

Keep responses conversational, well-structured, and focused on practical next steps the user can take."""


class PromptMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ChatModel(ABC):
    @abstractmethod
    def complete(self, messages: list[PromptMessage]) -> str | None:
        """Single blocking completion. Upstream errors propagate as raised."""
        pass


def _first_candidate_text(response) -> str | None:
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    text = "".join(getattr(p, "text", "") or "" for p in parts)
    return text or None


class GeminiChatModel(ChatModel):
    def __init__(
        self,
        api_key: str | None = None,
        model_name: str | None = None,
        max_output_tokens: int | None = None,
        temperature: float | None = None,
    ):
        self.api_key = api_key or get_gemini_api_key()
        self.model_name = model_name or get_gemini_model()
        self.max_output_tokens = max_output_tokens or get_max_output_tokens()
        self.temperature = temperature if temperature is not None else get_temperature()

    def complete(self, messages: list[PromptMessage]) -> str | None:
        if not self.api_key:
            raise google_exceptions.Unauthenticated("GEMINI_API_KEY is not set")

        system = "\n\n".join(m.content for m in messages if m.role == "system")
        contents = [
            {"role": "user" if m.role == "user" else "model", "parts": [m.content]}
            for m in messages
            if m.role != "system"
        ]

        genai.configure(api_key=self.api_key)
        model = genai.GenerativeModel(self.model_name, system_instruction=system or None)
        logger.debug("Gemini call: model={} contents={}", self.model_name, len(contents))
        response = model.generate_content(
            contents,
            generation_config=genai.GenerationConfig(
                max_output_tokens=self.max_output_tokens,
                temperature=self.temperature,
            ),
        )
        return _first_candidate_text(response)
