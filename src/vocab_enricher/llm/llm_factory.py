from ..settings import OutputSettings
from .llm_base import LLMClient
from .openai_llm import OpenAIClient
from ..logging import get_logger


def create_llm_client(settings: OutputSettings) -> LLMClient:
    logger = get_logger("vocab_enricher.llm.factory")
    provider = settings.llm_provider
    if provider == "openai":
        logger.debug("Creating LLM client for provider '%s' and model '%s'", provider, settings.llm_model)
        return OpenAIClient(settings=settings)
    else:
        raise ValueError(f"Unsupported LLM provider: {provider}")
