import asyncio
import re
import time
from datetime import date
from pathlib import Path

import aiohttp
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..llm.llm_base import LLMClient
from ..logging import get_logger


def build_image_prompt(word: str, context: str = "", source_language: str = "German") -> str:
    prompt = (
        f"I am creating Anki cards to remember {source_language} words. "
        f"Please help me create images for them. The word is: \"{word}\". "
    )
    if context:
        prompt += f"Context: {context} "
    prompt += (
        "They should be simple colorful drawings, easy to remember and associate the word with. "
        "And they SHOULD NOT (VERY IMPORTANT) have ANY WORDS in them, ESPECIALLY the keyword."
    )
    return prompt


def image_file_name(word: str) -> str:
    return f"{int(time.time() * 1000)}_{re.sub(r'[^a-zA-Z0-9]', '_', word)}.png"


class ImageService:
    def __init__(
        self,
        llm: LLMClient,
        images_dir: Path,
        *,
        date_partitioned: bool = True,
        source_language: str = "German",
        strict: bool = False,
    ) -> None:
        self._llm = llm
        self._source_language = source_language
        self._strict = strict
        self._logger = get_logger("vocab_enricher.services.image")

        self.images_dir = Path(images_dir)
        if date_partitioned:
            self.images_dir = self.images_dir / date.today().isoformat()
        self.images_dir.mkdir(parents=True, exist_ok=True)
        self._logger.debug("Images will be written to %s", self.images_dir)

    async def generate_image(self, word: str, context: str = "", prompt: str | None = None) -> Path | None:
        """
        Generate one image for the word and save it under the images directory.
        `prompt` replaces the default prompt built from word and context.
        Returns the path of the written file, or None if nothing was produced.
        """
        if prompt is None:
            prompt = build_image_prompt(word, context, self._source_language)
        try:
            image = await self._llm.create_image(prompt)
            if image is None or not (image.data or image.url):
                self._logger.warning("No image returned for '%s'", word)
                return None

            image_bytes = image.data or await self._download(image.url)
            file_path = self.images_dir / image_file_name(word)
            file_path.write_bytes(image_bytes)
            self._logger.info("Saved image for '%s' to %s", word, file_path)
            return file_path
        except Exception as e:
            if self._strict:
                raise
            self._logger.error("Image generation for '%s' failed: %s", word, e)
            return None

    @retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(),
        retry=retry_if_exception_type((aiohttp.ClientError, asyncio.TimeoutError)),
    )
    async def _download(self, url: str) -> bytes:
        self._logger.debug("Downloading image from %s", url)
        async with aiohttp.ClientSession() as session:
            async with session.get(url) as response:
                response.raise_for_status()
                return await response.read()
