from dataclasses import dataclass, replace


@dataclass
class VocabEntry:
    name: str
    translation: str = ""
    example_sentence: str = ""
    example_sentence_translation: str = ""

    cloze_sentence: str = ""
    alternative_words: str = ""
    inflected_forms: str = ""
    part_of_speech: str = ""
    articled_word: str = ""
    image_path: str = ""


def _uncapitalize_first_letter(text: str) -> str:
    text = text.strip()
    if not text:
        return text
    return text[0].lower() + text[1:]


def sanitize_entry(entry: VocabEntry) -> VocabEntry:
    """Trim the word and its translation and lower-case their first letter."""
    return replace(
        entry,
        name=_uncapitalize_first_letter(entry.name),
        translation=_uncapitalize_first_letter(entry.translation),
    )
