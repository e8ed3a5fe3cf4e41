from typing import Optional

import google.generativeai as genai
import openai
from google.api_core import exceptions as google_exceptions
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from chronicle.core.config import settings
from chronicle.core.logging import logger


class UpstreamError(Exception):
    """The text-generation service could not produce usable output."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def describe_status_error(status_code: int) -> str:
    """Readable reason for a non-success status from the AI service."""
    if status_code == 400:
        return "Invalid request to AI service"
    if status_code == 401:
        return "AI service authentication failed. Check the configured API key."
    if status_code == 403:
        return "Access to AI service denied"
    if status_code == 429:
        return "AI service rate limit exceeded. Please try again in a few minutes."
    if status_code in (500, 502, 503, 504):
        return "AI service is temporarily unavailable. Please try again later."
    return f"AI service error ({status_code})"


class LLMService:
    """Thin async wrapper over the configured chat model"""

    def __init__(self):
        self._llm = None
        self.llm_type = None
        self._system_instruction = None

    # ---------------------
    # Configuration
    # ---------------------
    @property
    def provider(self) -> str:
        return settings.llm_provider.lower()

    @property
    def api_key(self) -> Optional[str]:
        if self.provider == "google":
            return settings.google_api_key
        return settings.openai_api_key

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    # ---------------------
    # Lazy-loaded model
    # ---------------------
    @property
    def llm(self):
        if self._llm is None:
            self._initialize_llm()
        return self._llm

    def _initialize_llm(self):
        """Initialize Gemini or OpenAI chat model from settings."""
        provider = self.provider
        logger.info(f"Initializing LLM provider={provider}")

        if not self.is_configured:
            raise UpstreamError(f"No API key configured for provider '{provider}'")

        if provider == "google":
            genai.configure(api_key=settings.google_api_key)
            self._llm = self._gemini_model(None)
            self.llm_type = "google"
            logger.info("✓ Gemini LLM initialized successfully.")

        elif provider == "openai":
            self._llm = ChatOpenAI(
                model=settings.llm_model,
                temperature=settings.llm_temperature,
                max_tokens=settings.max_tokens,
                api_key=settings.openai_api_key,
                timeout=settings.llm_timeout_seconds,
                max_retries=0,
            )
            self.llm_type = "openai"
            logger.info("✓ OpenAI LLM initialized successfully.")

        else:
            raise UpstreamError(f"Unknown LLM provider: {provider}")

    def _gemini_model(self, system_instruction: Optional[str]):
        model_name = settings.llm_model
        if not model_name.startswith("models/"):
            model_name = f"models/{model_name}"
        logger.info(f"Using Gemini model: {model_name}")

        generation_config = genai.GenerationConfig(
            temperature=settings.llm_temperature,
            max_output_tokens=settings.max_tokens,
            response_mime_type="application/json",
        )
        self._system_instruction = system_instruction
        return genai.GenerativeModel(
            model_name=model_name,
            generation_config=generation_config,
            system_instruction=system_instruction,
        )

    def reset(self):
        """Drop the cached model so the next call re-reads settings."""
        self._llm = None
        self.llm_type = None
        self._system_instruction = None

    # ---------------------
    # Generation
    # ---------------------
    async def _invoke_openai(self, system_prompt: str, user_prompt: str) -> str:
        response = await self.llm.ainvoke([
            SystemMessage(content=system_prompt),
            HumanMessage(content=user_prompt),
        ])
        content = response.content
        if isinstance(content, list):
            content = "".join(
                part.get("text", "") if isinstance(part, dict) else str(part)
                for part in content
            )
        return content or ""

    async def _invoke_google(self, system_prompt: str, user_prompt: str) -> str:
        # Gemini fixes the system instruction per model instance
        if self._system_instruction != system_prompt:
            self._llm = self._gemini_model(system_prompt)
        resp = await self.llm.generate_content_async(user_prompt)
        return resp.text or ""

    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Run one chat completion; every failure becomes an UpstreamError."""
        try:
            if self._llm is None:
                self._initialize_llm()
            if self.llm_type == "google":
                text = await self._invoke_google(system_prompt, user_prompt)
            else:
                text = await self._invoke_openai(system_prompt, user_prompt)
        except UpstreamError:
            raise
        except openai.APIStatusError as e:
            raise UpstreamError(describe_status_error(e.status_code), status_code=e.status_code) from e
        except openai.APITimeoutError as e:
            raise UpstreamError("AI service request timed out") from e
        except openai.APIConnectionError as e:
            raise UpstreamError(f"Network error contacting AI service: {e}") from e
        except google_exceptions.GoogleAPICallError as e:
            status = int(e.code) if isinstance(e.code, int) else None
            message = describe_status_error(status) if status else f"AI service error: {e}"
            raise UpstreamError(message, status_code=status) from e
        except Exception as e:
            logger.error(f"Unexpected AI service failure: {e}", exc_info=True)
            raise UpstreamError(f"AI service call failed: {e}") from e

        if not text.strip():
            raise UpstreamError("AI service returned an empty response")
        return text


# Global instance
llm_service = LLMService()
