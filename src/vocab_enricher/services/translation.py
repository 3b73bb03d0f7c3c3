from ..llm.prompts import TEXT_TRANSLATION, WORD_TRANSLATION
from ..vocab_entry import VocabEntry
from .service_base import LLMService


class TranslationService(LLMService):
    async def translate_word(self, word: str) -> str:
        return await self._ask(WORD_TRANSLATION, "", word=word)

    async def translate_text(self, text: str, original_word: str, translations: str) -> str:
        return await self._ask(
            TEXT_TRANSLATION,
            "",
            text=text,
            original_word=original_word,
            translations=translations,
        )

    async def ensure_translation(self, entry: VocabEntry) -> VocabEntry:
        """Fill the word translation and then the example sentence translation, if missing."""
        if not entry.translation and entry.name:
            entry.translation = await self.translate_word(entry.name)

        if not entry.example_sentence_translation and entry.example_sentence:
            entry.example_sentence_translation = await self.translate_text(
                entry.example_sentence,
                original_word=entry.name,
                translations=entry.translation,
            )
        return entry
