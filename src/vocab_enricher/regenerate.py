import asyncio
import re
from pathlib import Path

from rich.console import Console
from rich.prompt import Prompt

from .csv_io import IMAGE_PATH_COLUMN, SENTENCE_COLUMN, WORD_COLUMN, read_enriched, write_enriched
from .llm.llm_base import LLMClient
from .llm.llm_factory import create_llm_client
from .logging import get_logger
from .pipeline import relative_image_path
from .services.image import ImageService
from .settings import OutputSettings


LEADING_ARTICLE = re.compile(r"^(der|die|das|the|le|la|les|el|los|las|il|lo|gli)\s+", re.IGNORECASE)


def matches_word(candidate: str, query: str) -> bool:
    """Case-insensitive match: exact, substring, or exact once the leading article is dropped."""
    candidate = candidate.lower()
    query = query.lower()
    return (
        candidate == query
        or query in candidate
        or LEADING_ARTICLE.sub("", candidate) == query
    )


def build_enhanced_prompt(word: str, sentence: str, custom_context: str, source_language: str = "German") -> str:
    prompt = (
        f"I am creating Anki cards to remember {source_language} words. "
        f"Please help me create an image for the {source_language} word \"{word}\"."
    )
    if sentence:
        prompt += f" Context from example sentence: {sentence}."
    if custom_context:
        prompt += f" Additional context: {custom_context}."
    prompt += (
        " The image should be simple, colorful, easy to remember and associate with the word."
        " VERY IMPORTANT: The image SHOULD NOT have ANY WORDS or TEXT in it, especially not the keyword itself."
    )
    return prompt


class ImageRegenerator:
    def __init__(
        self,
        settings: OutputSettings,
        llm: LLMClient | None = None,
        console: Console | None = None,
    ) -> None:
        self.settings = settings
        self.output_path = Path(settings.output_csv_path)
        self.logger = get_logger("vocab_enricher.regenerate")
        self.console = console or Console()

        self.llm = llm if llm is not None else create_llm_client(settings)
        self.images = ImageService(
            self.llm,
            settings.images_dir,
            date_partitioned=settings.images_date_partitioned,
            source_language=settings.source_language,
        )

    def find_row(self, word: str) -> dict[str, str] | None:
        if not self.output_path.is_file():
            self.logger.error("Output file not found: %s", self.output_path)
            return None
        _, rows = read_enriched(self.output_path)
        for row in rows:
            candidate = row.get(WORD_COLUMN, "")
            if candidate and matches_word(candidate, word):
                return row
        return None

    def update_image_path(self, word: str, image_path: Path) -> bool:
        """Rewrite the imagePath of the row whose Word equals `word`, leaving every other row untouched."""
        columns, rows = read_enriched(self.output_path)
        if IMAGE_PATH_COLUMN not in columns:
            columns.append(IMAGE_PATH_COLUMN)
        for row in rows:
            if row.get(WORD_COLUMN) == word:
                row[IMAGE_PATH_COLUMN] = relative_image_path(image_path, self.output_path)
                write_enriched(rows, self.output_path, columns)
                self.logger.info("Updated CSV with new image path for '%s'", word)
                return True
        self.logger.warning("Word '%s' disappeared from %s, CSV not updated", word, self.output_path)
        return False

    def run(self) -> bool:
        return asyncio.run(self.run_async())

    async def run_async(self) -> bool:
        try:
            return await self._regenerate()
        finally:
            await self.llm.close()

    def _ask_text(self, question: str) -> str:
        try:
            return Prompt.ask(question, console=self.console, default="", show_default=False).strip()
        except EOFError:
            # closed stdin counts as no answer
            self.console.print()
            return ""

    async def _regenerate(self) -> bool:
        self.console.print("[bold]Image Regeneration Tool[/bold]\n")
        word = self._ask_text(f"Enter the {self.settings.source_language} word to regenerate image for")
        if not word:
            self.console.print("[red]No word provided. Exiting.[/red]")
            return False

        self.console.print(f"\nSearching for [bold]{word}[/bold] in {self.output_path}...")
        row = self.find_row(word)
        if row is None:
            self.console.print(f"[red]Word '{word}' not found in the output file.[/red]")
            self.console.print("Make sure you've run the main processing first and the word exists in the CSV.")
            return False

        found_word = row[WORD_COLUMN]
        sentence = row.get(SENTENCE_COLUMN, "")
        self.console.print(f"Found word: [bold]{found_word}[/bold]")
        self.console.print(f"   Translation: {row.get('Translation', '')}")
        self.console.print(f"   Example: {sentence}")

        custom_context = self._ask_text("\nEnter custom context for the image (optional)")
        prompt = build_enhanced_prompt(found_word, sentence, custom_context, self.settings.source_language)
        self.console.print(f"\nGenerating new image...\n[dim]Using prompt: {prompt}[/dim]")

        image_path = await self.images.generate_image(found_word, prompt=prompt)
        if image_path is None:
            self.console.print("[red]Failed to generate new image[/red]")
            return False

        self.console.print(f"New image generated: {image_path}")
        updated = self.update_image_path(found_word, image_path)
        if updated:
            self.console.print("[green]Image regeneration complete![/green]")
        return updated
