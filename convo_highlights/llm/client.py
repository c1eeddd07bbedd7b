"""Classification oracle backed by an Ollama LLM."""

from typing import Protocol

import structlog
from langchain_core.messages import BaseMessage
from langchain_core.output_parsers import StrOutputParser
from langchain_ollama import OllamaLLM
from tenacity import AsyncRetrying, Retrying, stop_after_attempt, wait_exponential

from convo_highlights.config import Settings, get_settings

logger = structlog.get_logger(__name__)


class OracleError(Exception):
    """Error while invoking the oracle or interpreting its response."""

    pass


class ClassificationOracle(Protocol):
    """External text-classification service.

    Receives fully formatted chat messages and returns the raw response text.
    Implementations may raise any exception; callers treat every failure as
    oracle unavailability.
    """

    def invoke(self, messages: list[BaseMessage], *, num_predict: int | None = None) -> str:
        ...

    async def ainvoke(self, messages: list[BaseMessage], *, num_predict: int | None = None) -> str:
        ...


def create_llm_client(settings: Settings | None = None, num_predict: int | None = None) -> OllamaLLM:
    """Create configured Ollama LLM client.

    Args:
        settings: Optional custom settings. Uses defaults if not provided.
        num_predict: Max tokens to generate. Defaults to ``settings.llm_num_predict``.

    Returns:
        Configured OllamaLLM instance.
    """
    settings = settings or get_settings()

    return OllamaLLM(
        model=settings.llm_model_name,
        base_url=settings.llm_ollama_base_url,
        temperature=settings.llm_temperature,
        num_predict=num_predict or settings.llm_num_predict,
        client_kwargs={"timeout": settings.llm_request_timeout},
    )


class OllamaOracle:
    """Oracle that sends chat messages through ``OllamaLLM | StrOutputParser``."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def _chain(self, num_predict: int | None):
        return create_llm_client(self.settings, num_predict) | StrOutputParser()

    def _retry_kwargs(self) -> dict:
        return {
            "stop": stop_after_attempt(max(1, self.settings.max_retries)),
            "wait": wait_exponential(multiplier=1, min=1, max=10),
            "reraise": True,
        }

    def invoke(self, messages: list[BaseMessage], *, num_predict: int | None = None) -> str:
        chain = self._chain(num_predict)
        for attempt in Retrying(**self._retry_kwargs()):
            with attempt:
                logger.debug(
                    "oracle_invoke",
                    model=self.settings.llm_model_name,
                    attempt=attempt.retry_state.attempt_number,
                )
                response = chain.invoke(messages)
        return response

    async def ainvoke(self, messages: list[BaseMessage], *, num_predict: int | None = None) -> str:
        chain = self._chain(num_predict)
        async for attempt in AsyncRetrying(**self._retry_kwargs()):
            with attempt:
                logger.debug(
                    "oracle_ainvoke",
                    model=self.settings.llm_model_name,
                    attempt=attempt.retry_state.attempt_number,
                )
                response = await chain.ainvoke(messages)
        return response


def create_oracle(settings: Settings | None = None) -> OllamaOracle | None:
    """Return an oracle if enabled in settings, else ``None``."""
    settings = settings or get_settings()
    if not settings.oracle_enabled:
        return None
    return OllamaOracle(settings)
