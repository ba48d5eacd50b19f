from enum import StrEnum

import structlog
from langchain_anthropic import ChatAnthropic
from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from cashflow.config import settings
from cashflow.exceptions import AppError

logger = structlog.get_logger()


class LLMProvider(StrEnum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"


class LLMFactory:
    @staticmethod
    def create(
        provider: str | None = None,
        model: str | None = None,
        **kwargs: object,
    ) -> BaseChatModel:
        provider = provider or settings.llm_provider
        model = model or settings.llm_model
        kwargs.setdefault("max_tokens", settings.llm_max_tokens)

        match provider:
            case LLMProvider.OPENAI:
                api_key = settings.openai_api_key
                if not api_key:
                    raise AppError("OpenAI API key is not configured", code="LLM_CONFIG_ERROR")
                return ChatOpenAI(model=model, api_key=api_key, **kwargs)  # type: ignore[arg-type]

            case LLMProvider.ANTHROPIC:
                api_key = settings.anthropic_api_key
                if not api_key:
                    raise AppError("Anthropic API key is not configured", code="LLM_CONFIG_ERROR")
                return ChatAnthropic(model=model, api_key=api_key, **kwargs)  # type: ignore[arg-type]

            case _:
                raise AppError(f"Unknown LLM provider: '{provider}'", code="LLM_CONFIG_ERROR")

    @classmethod
    def create_optional(cls) -> BaseChatModel | None:
        """Build the configured chat model, or None when no key is set.

        Insights and chat fall back to canned answers without a model.
        """
        try:
            llm = cls.create()
        except AppError as exc:
            logger.warning("llm_unavailable", reason=exc.message)
            return None
        logger.info("llm_configured", provider=settings.llm_provider, model=settings.llm_model)
        return llm
