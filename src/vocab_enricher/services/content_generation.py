from ..llm.prompts import EXAMPLE_SENTENCE
from .service_base import LLMService


class ContentGenerationService(LLMService):
    async def generate_example_sentence(self, word: str) -> str:
        return await self._ask(EXAMPLE_SENTENCE, "", word=word)
