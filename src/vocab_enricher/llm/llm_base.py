from abc import ABC, abstractmethod
from dataclasses import dataclass
import time

from ..logging import get_logger
from .jinja2_prompt_formatter import PromptRenderer
from .prompts import PromptTemplate


@dataclass
class GeneratedImage:
    """Image models answer either with a URL to fetch or with the image itself."""
    url: str | None = None
    data: bytes | None = None


class LLMClient(ABC):
    def __init__(self, source_language: str, target_language: str) -> None:
        self._logger = get_logger(f"vocab_enricher.llm.{self.__class__.__name__}")
        self._language_context = {
            "source_language": source_language,
            "target_language": target_language,
        }

    async def ask(self, template: PromptTemplate, **variables: str) -> str:
        """Render a prompt template, send it to the model and return the trimmed answer."""
        context = {**self._language_context, **variables}
        system = PromptRenderer.render(template.system, context)
        user = PromptRenderer.render(template.user, context)

        self._logger.debug("Prompt '%s': %s | %s", template.name, system, user)
        start_time = time.time()
        answer = await self._complete(system=system, user=user)
        self._logger.debug("Prompt '%s' took %.2f seconds", template.name, time.time() - start_time)
        return answer.strip()

    async def create_image(self, prompt: str) -> GeneratedImage | None:
        """Request one generated image."""
        self._logger.debug("Requesting image: %s", prompt)
        start_time = time.time()
        image = await self._generate_image(prompt)
        self._logger.info("Image generation took %.2f seconds", time.time() - start_time)
        return image

    @abstractmethod
    async def _complete(self, system: str, user: str) -> str:
        raise NotImplementedError

    @abstractmethod
    async def _generate_image(self, prompt: str) -> GeneratedImage | None:
        raise NotImplementedError

    async def close(self) -> None:
        pass
