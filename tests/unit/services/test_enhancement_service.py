import asyncio

import pytest

from vocab_enricher.services.enhancement import AnkiEnhancementService, mask_word
from vocab_enricher.vocab_entry import VocabEntry


@pytest.fixture
def entry():
    return VocabEntry(
        name="tisch",
        translation="стол",
        example_sentence="1. Der Tisch ist groß. 2. Ich kaufe einen Tisch.",
    )


class TestMaskWord:
    def test_case_insensitive_all_occurrences(self):
        assert mask_word("Der Tisch, der tisch.", "tisch") == "Der ***, der ***."

    def test_special_characters_are_literal(self):
        assert mask_word("Kosten (pl.) sind hoch", "(pl.)") == "Kosten *** sind hoch"

    def test_empty_word(self):
        assert mask_word("Der Tisch.", "") == "Der Tisch."


class TestEnhance:
    def test_all_five_fields_are_filled(self, fake_llm, entry):
        fake_llm.answers.update(
            {
                "cloze_sentence": "1. Der *** ist groß. 2. Ich kaufe einen ***.",
                "alternatives": "Tisch, Tafel",
                "inflected_forms": "die Tische",
                "part_of_speech": "noun",
                "articled_word": "der Tisch",
            }
        )

        asyncio.run(AnkiEnhancementService(fake_llm).enhance(entry))

        assert entry.cloze_sentence == "1. Der *** ist groß. 2. Ich kaufe einen ***."
        assert entry.alternative_words == "Tisch, Tafel"
        assert entry.inflected_forms == "die Tische"
        assert entry.part_of_speech == "noun"
        assert entry.articled_word == "der Tisch"
        assert sorted(fake_llm.call_names()) == sorted(
            ["cloze_sentence", "alternatives", "inflected_forms", "part_of_speech", "articled_word"]
        )

    def test_alternatives_are_asked_for_the_translation(self, fake_llm, entry):
        asyncio.run(AnkiEnhancementService(fake_llm).enhance(entry))

        calls = dict(fake_llm.calls)
        assert calls["alternatives"] == {"translation": "стол"}
        assert calls["cloze_sentence"] == {"sentence": entry.example_sentence, "word": "tisch"}

    def test_lenient_fallbacks(self, fake_llm, entry):
        for name in ["cloze_sentence", "alternatives", "inflected_forms", "part_of_speech", "articled_word"]:
            fake_llm.answers[name] = RuntimeError("API down")

        asyncio.run(AnkiEnhancementService(fake_llm).enhance(entry))

        assert entry.cloze_sentence == "1. Der *** ist groß. 2. Ich kaufe einen ***."
        assert entry.alternative_words == ""
        assert entry.inflected_forms == ""
        assert entry.part_of_speech == ""
        assert entry.articled_word == "tisch"

    def test_one_failure_does_not_affect_the_others(self, fake_llm, entry):
        fake_llm.answers["part_of_speech"] = RuntimeError("API down")
        fake_llm.answers["inflected_forms"] = "die Tische"

        asyncio.run(AnkiEnhancementService(fake_llm).enhance(entry))

        assert entry.part_of_speech == ""
        assert entry.inflected_forms == "die Tische"

    def test_strict_failure_aborts_the_joint_wait(self, fake_llm, entry):
        fake_llm.answers["inflected_forms"] = RuntimeError("API down")

        with pytest.raises(RuntimeError, match="API down"):
            asyncio.run(AnkiEnhancementService(fake_llm, strict=True).enhance(entry))

    def test_strict_failure_cancels_pending_calls(self, fake_llm, entry):
        cancelled = []

        async def slow_answer():
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.append("part_of_speech")
                raise
            return "noun"

        fake_llm.answers["part_of_speech"] = slow_answer
        fake_llm.answers["inflected_forms"] = RuntimeError("API down")

        async def scenario():
            with pytest.raises(RuntimeError, match="API down"):
                await AnkiEnhancementService(fake_llm, strict=True).enhance(entry)
            # recorded before enhance() returned control, not at loop shutdown
            return list(cancelled)

        assert asyncio.run(scenario()) == ["part_of_speech"]

    def test_no_sentence_no_cloze_call(self, fake_llm):
        entry = VocabEntry(name="tisch", translation="стол")

        asyncio.run(AnkiEnhancementService(fake_llm).enhance(entry))

        assert entry.cloze_sentence == ""
        assert "cloze_sentence" not in fake_llm.call_names()

    def test_no_translation_no_alternatives_call(self, fake_llm):
        entry = VocabEntry(name="tisch", example_sentence="Der Tisch.")

        asyncio.run(AnkiEnhancementService(fake_llm).enhance(entry))

        assert entry.alternative_words == ""
        assert "alternatives" not in fake_llm.call_names()
