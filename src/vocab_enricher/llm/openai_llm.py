import base64

import httpx
import openai
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from .llm_base import GeneratedImage, LLMClient
from ..settings import OutputSettings


TRANSIENT_ERRORS = (
    openai.APIConnectionError,
    openai.RateLimitError,
    openai.InternalServerError,
)


class OpenAIClient(LLMClient):
    def __init__(self, settings: OutputSettings, http_client: httpx.AsyncClient | None = None) -> None:
        super().__init__(
            source_language=settings.source_language,
            target_language=settings.target_language,
        )
        self._model = settings.llm_model
        self._temperature = settings.llm_temperature
        self._image_model = settings.image_model
        self._image_size = settings.image_size
        self._image_quality = settings.image_quality
        self._max_attempts = settings.llm_max_attempts
        # tenacity owns retries, LLM_MAX_ATTEMPTS is the total number of requests
        self._client = openai.AsyncOpenAI(
            api_key=settings.openai_api_key.get_secret_value(),
            max_retries=0,
            http_client=http_client,
        )
        self._logger.debug("Initialized OpenAI client for model '%s'", self._model)

    def _retrying(self) -> AsyncRetrying:
        return AsyncRetrying(
            reraise=True,
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_exponential(),
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
        )

    async def _complete(self, system: str, user: str) -> str:
        async for attempt in self._retrying():
            with attempt:
                response = await self._client.chat.completions.create(
                    model=self._model,
                    temperature=self._temperature,
                    messages=[
                        {"role": "system", "content": system},
                        {"role": "user", "content": user},
                    ],
                )
        return response.choices[0].message.content or ""

    async def _generate_image(self, prompt: str) -> GeneratedImage | None:
        self._logger.info("Calling OpenAI image API for model '%s', this may take a while...", self._image_model)
        async for attempt in self._retrying():
            with attempt:
                response = await self._client.images.generate(
                    model=self._image_model,
                    prompt=prompt,
                    n=1,
                    size=self._image_size,
                    quality=self._image_quality,
                )
        if not response.data:
            return None
        # dall-e models answer with a URL, gpt-image models only with b64_json
        image = response.data[0]
        if image.b64_json:
            return GeneratedImage(data=base64.b64decode(image.b64_json))
        if image.url:
            return GeneratedImage(url=image.url)
        return None

    async def close(self) -> None:
        await self._client.close()
