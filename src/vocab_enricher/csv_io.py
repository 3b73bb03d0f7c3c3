import csv
import io
from pathlib import Path

from pydantic import AliasChoices, BaseModel, Field, ValidationError, field_validator

from .vocab_entry import VocabEntry
from .logging import get_logger


logger = get_logger("vocab_enricher.csv_io")

OUTPUT_COLUMNS: list[str] = [
    "Word",
    "Translation",
    "Sample sentence",
    "Sample sentence without the word",
    "Sample sentence translation",
    "Alternatives",
    "Plural and inflected forms",
    "Part of Speech",
    "imagePath",
]
WORD_COLUMN = "Word"
SENTENCE_COLUMN = "Sample sentence"
IMAGE_PATH_COLUMN = "imagePath"


class InputRecord(BaseModel):
    word: str = Field(min_length=1, validation_alias=AliasChoices("Word", "Name"))
    translation: str = Field(default="", validation_alias="Translation")
    example_sentence: str = Field(default="", validation_alias="Example sentence")
    example_sentence_translation: str = Field(default="", validation_alias="Example sentence translation")

    @field_validator("word")
    @classmethod
    def _word_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Word is required")
        return value


def _read_rows(text: str) -> tuple[list[str], list[dict[str, str]]]:
    # Exported Notion tables start with a BOM
    text = text.removeprefix("\ufeff")
    reader = csv.DictReader(io.StringIO(text))
    rows = []
    for row in reader:
        # surplus cells land under the None key
        row = {key: value or "" for key, value in row.items() if key is not None}
        if any(value.strip() for value in row.values()):
            rows.append(row)
    return list(reader.fieldnames or []), rows


def _describe_validation_error(row_number: int, error: ValidationError) -> str:
    problems = "; ".join(
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}" for e in error.errors()
    )
    return f"row {row_number}: {problems}"


def read_from_string(text: str) -> list[VocabEntry]:
    logger.debug("Parsing CSV text into vocabulary entries")
    _, rows = _read_rows(text)
    logger.debug("Parsed %d non-empty CSV rows", len(rows))

    entries: list[VocabEntry] = []
    for idx, row in enumerate(rows):
        try:
            record = InputRecord.model_validate(row)
        except ValidationError as e:
            raise ValueError(f"Error reading CSV file: {_describe_validation_error(idx + 1, e)}") from e
        entries.append(
            VocabEntry(
                name=record.word,
                translation=record.translation,
                example_sentence=record.example_sentence,
                example_sentence_translation=record.example_sentence_translation,
            )
        )
    logger.info("Converted %d CSV rows into %d vocabulary entries", len(rows), len(entries))
    return entries


def read_from_file(path: Path) -> list[VocabEntry]:
    logger.info("Reading CSV vocabulary from %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ValueError(f"Error reading CSV file: {e}") from e
    return read_from_string(text)


def entry_to_row(entry: VocabEntry) -> dict[str, str]:
    return {
        "Word": entry.articled_word or entry.name,
        "Translation": entry.translation,
        "Sample sentence": entry.example_sentence,
        "Sample sentence without the word": entry.cloze_sentence,
        "Sample sentence translation": entry.example_sentence_translation,
        "Alternatives": entry.alternative_words,
        "Plural and inflected forms": entry.inflected_forms,
        "Part of Speech": entry.part_of_speech,
        "imagePath": entry.image_path,
    }


def write_to_file(vocab: list[VocabEntry], path: Path) -> None:
    logger.info("Writing %d enriched entries to CSV at %s", len(vocab), path)
    write_enriched([entry_to_row(e) for e in vocab], path, OUTPUT_COLUMNS)


def read_enriched(path: Path) -> tuple[list[str], list[dict[str, str]]]:
    """Read an enriched CSV back as raw rows, keeping its header order."""
    logger.debug("Reading enriched CSV from %s", path)
    columns, rows = _read_rows(path.read_text(encoding="utf-8"))
    return columns or list(OUTPUT_COLUMNS), rows


def write_enriched(rows: list[dict[str, str]], path: Path, columns: list[str] | None = None) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=columns or OUTPUT_COLUMNS, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(rows)
    logger.info("Finished writing CSV file to %s", path.resolve())
