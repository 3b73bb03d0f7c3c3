import asyncio
import re

from ..llm.prompts import (
    ALTERNATIVES,
    ARTICLED_WORD,
    CLOZE_SENTENCE,
    INFLECTED_FORMS,
    PART_OF_SPEECH,
)
from ..vocab_entry import VocabEntry
from .service_base import LLMService


CLOZE_MARK = "***"


def mask_word(sentence: str, word: str) -> str:
    """Replace every case-insensitive occurrence of the word with the cloze mark."""
    if not word:
        return sentence
    return re.sub(re.escape(word), CLOZE_MARK, sentence, flags=re.IGNORECASE)


class AnkiEnhancementService(LLMService):
    async def create_cloze_sentence(self, sentence: str, word: str) -> str:
        if not sentence:
            return ""
        return await self._ask(CLOZE_SENTENCE, mask_word(sentence, word), sentence=sentence, word=word)

    async def generate_alternatives(self, translation: str) -> str:
        if not translation:
            return ""
        return await self._ask(ALTERNATIVES, "", translation=translation)

    async def generate_inflected_forms(self, word: str) -> str:
        return await self._ask(INFLECTED_FORMS, "", word=word)

    async def identify_part_of_speech(self, word: str) -> str:
        return await self._ask(PART_OF_SPEECH, "", word=word)

    async def add_article_if_needed(self, word: str) -> str:
        return await self._ask(ARTICLED_WORD, word, word=word)

    async def enhance(self, entry: VocabEntry) -> VocabEntry:
        """Derive the five flashcard fields concurrently and store them on the entry.

        If one call fails (strict mode), the others are cancelled and awaited
        before the error propagates, so no request outlives the client.
        """
        tasks = [
            asyncio.ensure_future(coro)
            for coro in (
                self.create_cloze_sentence(entry.example_sentence, entry.name),
                self.generate_alternatives(entry.translation),
                self.generate_inflected_forms(entry.name),
                self.identify_part_of_speech(entry.name),
                self.add_article_if_needed(entry.name),
            )
        ]
        try:
            results = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        (
            entry.cloze_sentence,
            entry.alternative_words,
            entry.inflected_forms,
            entry.part_of_speech,
            entry.articled_word,
        ) = results
        return entry
