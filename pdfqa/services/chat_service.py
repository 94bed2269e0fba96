"""
Chat service for generating answers using LLM.
"""

import asyncio
from typing import Any, Dict, List, Optional
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from google.api_core.exceptions import GoogleAPIError
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_google_genai.chat_models import ChatGoogleGenerativeAIError

from ..config import QAConfig, settings
from ..errors import ProviderError
from ..language import Language, language_directive
from ..utils import (
    measure_time,
    log_processing_info,
    handle_processing_error
)
import logging

logger = logging.getLogger(__name__)

# Failures of the provider or the network; anything else is a bug on our side
PROVIDER_ERRORS = (ChatGoogleGenerativeAIError, GoogleAPIError, ConnectionError, OSError)


SYSTEM_PROMPT = """
You are an expert multilingual PDF assistant.

Instructions:
1. Answer the user's question based ONLY on the PDF content provided below
2. If the content doesn't contain enough information to answer the question, clearly state this
3. Respond in the same language the user writes in, unless told otherwise
4. If the question is unclear, ask for clarification
5. Be concise but informative

PDF content:
{document}
"""


class ChatService:
    """Service for generating grounded answers using LLM."""

    def __init__(self, config: Optional[QAConfig] = None, llm: Any = None):
        """
        Initialize the chat service.

        Args:
            config: Pipeline parameters, defaults to the values from settings
            llm: Chat model to use instead of Gemini; anything with ``ainvoke``
        """
        self.config = config or QAConfig.from_settings(settings)
        self._llm = llm

    @property
    def llm(self):
        if self._llm is None:
            self._llm = self._initialize_llm()
        return self._llm

    def _initialize_llm(self) -> ChatGoogleGenerativeAI:
        """Initialize the language model."""
        llm = ChatGoogleGenerativeAI(
            model=self.config.model_name,
            api_key=settings.google_api_key,
            temperature=self.config.temperature,
            max_output_tokens=self.config.max_tokens
        )

        log_processing_info("LLM initialized", {
            "model": self.config.model_name,
            "temperature": self.config.temperature,
            "max_tokens": self.config.max_tokens
        })

        return llm

    def truncate_document(self, text: str) -> str:
        """Keep the first ``truncation_budget`` characters of the document."""
        return text[:self.config.truncation_budget]

    def build_messages(self, question: str, document_text: str, language: Language) -> List[BaseMessage]:
        """
        Create the grounding prompt for the LLM.

        Args:
            question: User's question, sent verbatim
            document_text: Full document text, truncated here
            language: Language the answer must be written in

        Returns:
            System and human messages
        """
        system_prompt = SYSTEM_PROMPT.format(document=self.truncate_document(document_text)).strip()

        user_prompt = question
        directive = language_directive(language)
        if directive:
            user_prompt = f"{question}\n\n{directive}"

        return [
            SystemMessage(content=system_prompt),
            HumanMessage(content=user_prompt)
        ]

    @measure_time
    async def generate_answer(self, question: str, document_text: str, language: Language) -> str:
        """
        Ask the LLM a question about the document.

        Returns:
            The answer text

        Raises:
            ProviderError: PROVIDER_UNAVAILABLE when the provider or network fails or times out,
                INVALID_RESPONSE when the reply carries no text
        """
        messages = self.build_messages(question, document_text, language)
        llm = self.llm

        try:
            response = await asyncio.wait_for(
                llm.ainvoke(messages),
                timeout=self.config.timeout_seconds
            )
        except asyncio.TimeoutError as e:
            handle_processing_error("response_generation", e, {
                "model": self.config.model_name,
                "timeout_seconds": self.config.timeout_seconds
            })
            raise ProviderError(
                f"The AI provider did not answer within {self.config.timeout_seconds:g} seconds.",
                code="PROVIDER_UNAVAILABLE"
            ) from e
        except PROVIDER_ERRORS as e:
            error_info = handle_processing_error("response_generation", e, {
                "model": self.config.model_name,
                "question_length": len(question)
            })
            raise ProviderError(
                "The AI provider request failed.",
                code="PROVIDER_UNAVAILABLE",
                details={
                    "error_type": error_info["error_type"],
                    "error_message": error_info["error_message"]
                }
            ) from e

        answer = self._extract_text(response)
        if not answer:
            details = self._response_payload(response)
            logger.error(f"Invalid response from AI provider: {details}")
            raise ProviderError(
                "The AI provider returned an empty or malformed response.",
                code="INVALID_RESPONSE",
                details=details
            )

        log_processing_info("Response generated", {
            "question_length": len(question),
            "context_length": min(len(document_text), self.config.truncation_budget),
            "answer_length": len(answer),
            "language": language.value
        })

        return answer

    @staticmethod
    def _extract_text(response: Any) -> str:
        if not isinstance(response, BaseMessage):
            return ""

        content = response.content
        if isinstance(content, str):
            return content.strip()

        # Gemini may return a list of content parts
        parts = []
        if isinstance(content, list):
            for part in content:
                if isinstance(part, str):
                    parts.append(part)
                elif isinstance(part, dict) and isinstance(part.get("text"), str):
                    parts.append(part["text"])
        return "".join(parts).strip()

    @staticmethod
    def _response_payload(response: Any) -> Dict[str, Any]:
        """Diagnostic view of a provider response, safe to serialize."""
        payload: Dict[str, Any] = {"response_type": type(response).__name__}
        if isinstance(response, BaseMessage):
            payload["content"] = repr(response.content)[:500]
            metadata = getattr(response, "response_metadata", None) or {}
            payload["response_metadata"] = {str(k): str(v) for k, v in metadata.items()}
            if isinstance(response, AIMessage) and response.usage_metadata:
                payload["usage_metadata"] = dict(response.usage_metadata)
        else:
            payload["content"] = repr(response)[:500]
        return payload
