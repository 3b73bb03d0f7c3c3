from ..llm.llm_base import LLMClient
from ..llm.prompts import PromptTemplate
from ..logging import get_logger


class LLMService:
    """
    A service is a thin wrapper around a handful of prompt templates.
    In lenient mode a failed call is logged and replaced by a fallback value,
    in strict mode the error propagates to the caller.
    """

    def __init__(self, llm: LLMClient, *, strict: bool = False) -> None:
        self._llm = llm
        self._strict = strict
        self._logger = get_logger(f"vocab_enricher.services.{self.__class__.__name__}")

    async def _ask(self, template: PromptTemplate, fallback: str, **variables: str) -> str:
        try:
            return await self._llm.ask(template, **variables)
        except Exception as e:
            if self._strict:
                raise
            self._logger.error("'%s' call failed, using fallback %r: %s", template.name, fallback, e)
            return fallback
