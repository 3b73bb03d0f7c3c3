import asyncio
import os
from pathlib import Path

from .csv_io import read_from_file, write_to_file
from .llm.llm_base import LLMClient
from .llm.llm_factory import create_llm_client
from .logging import get_logger
from .services.content_generation import ContentGenerationService
from .services.enhancement import AnkiEnhancementService
from .services.image import ImageService
from .services.translation import TranslationService
from .settings import Settings
from .vocab_entry import VocabEntry, sanitize_entry


def relative_image_path(image_path: Path | None, output_csv_path: Path) -> str:
    """Image paths in the CSV are relative to the directory holding the CSV."""
    if image_path is None:
        return ""
    return Path(os.path.relpath(Path(image_path).resolve(), Path(output_csv_path).resolve().parent)).as_posix()


class Pipeline:
    def __init__(self, settings: Settings, llm: LLMClient | None = None) -> None:
        self.settings = settings
        self.logger = get_logger("vocab_enricher.pipeline")

        self.llm = llm if llm is not None else create_llm_client(settings)
        strict = settings.strict
        self.content_generation = ContentGenerationService(self.llm, strict=strict)
        self.translation = TranslationService(self.llm, strict=strict)
        self.enhancement = AnkiEnhancementService(self.llm, strict=strict)
        self.images = None
        if settings.generate_images:
            self.images = ImageService(
                self.llm,
                settings.images_dir,
                date_partitioned=settings.images_date_partitioned,
                source_language=settings.source_language,
                strict=strict,
            )

    def run(self) -> list[VocabEntry]:
        return asyncio.run(self.run_async())

    async def run_async(self) -> list[VocabEntry]:
        try:
            return await self._run()
        finally:
            await self.llm.close()

    async def _run(self) -> list[VocabEntry]:
        self.logger.info("Reading and processing CSV file %s", self.settings.input_csv_path)
        vocab = read_from_file(Path(self.settings.input_csv_path))
        self.logger.info("Found %d words to process", len(vocab))

        processed: list[VocabEntry] = []
        for i, entry in enumerate(vocab):
            self.logger.info("Processing word %d/%d: %s", i + 1, len(vocab), entry.name)
            processed.append(await self._process_entry(entry))

        output_path = Path(self.settings.output_csv_path)
        write_to_file(processed, output_path)
        self.logger.info("Processing complete! Output written to %s", output_path.resolve())
        if self.images is not None:
            self.logger.info("Images saved to %s", self.images.images_dir.resolve())
        return processed

    async def _process_entry(self, entry: VocabEntry) -> VocabEntry:
        entry = sanitize_entry(entry)
        try:
            await self._enrich(entry)
        except Exception as e:
            self.logger.error("Error processing word '%s': %s", entry.name, e)
            if self.settings.strict:
                raise
        else:
            self.logger.info("Processed: %s", entry.name)
        return entry

    async def _enrich(self, entry: VocabEntry) -> None:
        if not entry.example_sentence and entry.name:
            entry.example_sentence = await self.content_generation.generate_example_sentence(entry.name)

        await self.translation.ensure_translation(entry)

        if self.images is not None:
            image_path = await self.images.generate_image(entry.name, entry.example_sentence)
            entry.image_path = relative_image_path(image_path, self.settings.output_csv_path)

        await self.enhancement.enhance(entry)
