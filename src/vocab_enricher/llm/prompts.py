"""
Prompt templates for every model call, as (system, user) Jinja2 pairs.
`source_language` and `target_language` are always available to the templates.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class PromptTemplate:
    name: str
    system: str
    user: str


WORD_TRANSLATION = PromptTemplate(
    name="word_translation",
    system=(
        "You are a professional translator specializing in single word translations "
        "from {{ source_language }} to {{ target_language }}. "
        "If the word has close alternatives or synonyms in {{ target_language }}, provide them separated by commas. "
        "Limit the number of alternatives to 5. "
        "However, if the word has only one clear, direct translation with no meaningful alternatives, "
        "provide only that single translation. "
        "Only return the translation(s), nothing else."
    ),
    user="{{ word }}",
)

TEXT_TRANSLATION = PromptTemplate(
    name="text_translation",
    system=(
        "You are a professional translator. "
        "Translate the following text from {{ source_language }} to {{ target_language }}. "
        "{% if translations %}"
        "If the text contains the word {{ original_word }}, translate it using the following word(s): {{ translations }}. "
        "{% endif %}"
        "Only return the translation, nothing else."
    ),
    user="{% if not text %}{{ fail('nothing to translate') }}{% endif %}{{ text }}",
)

EXAMPLE_SENTENCE = PromptTemplate(
    name="example_sentence",
    system=(
        "You are a language teacher creating example sentences in {{ source_language }}. "
        "Create a concise, simple sentence that clearly demonstrates the usage of the given word. "
        "The sentence should focus on the word itself and be easy to understand. "
        "Only return the sentence, nothing else."
    ),
    user="Word: {{ word }}",
)

CLOZE_SENTENCE = PromptTemplate(
    name="cloze_sentence",
    system=(
        "Replace the specified {{ source_language }} word in the sentence(s) with \"***\". "
        "If there is more than one sentence, replace it in all of them. "
        "Keep everything else exactly the same, including the sentence numbers (1., 2., etc.). "
        "Only return the modified sentence without the \"Sentence: \" prefix."
    ),
    user="Sentence: {{ sentence }}\nWord to replace: {{ word }}",
)

ALTERNATIVES = PromptTemplate(
    name="alternatives",
    system=(
        "Given a {{ target_language }} word, provide {{ source_language }} words "
        "that can be translated to this {{ target_language }} word. "
        "Focus on the first/primary {{ target_language }} translation if multiple are provided. "
        "Provide alternatives separated by commas. "
        "These don't need to be exact synonyms, just {{ source_language }} words "
        "that could reasonably translate to the given {{ target_language }} word."
    ),
    user="{{ target_language }} word/translation: {{ translation }}",
)

INFLECTED_FORMS = PromptTemplate(
    name="inflected_forms",
    system=(
        "For the given {{ source_language }} word, provide its plural form and common inflected forms (if applicable). "
        "For nouns, include the plural. For verbs, include key conjugations. "
        "For adjectives, include comparative forms if relevant. "
        "Format as a concise list separated by commas."
    ),
    user="{{ source_language }} word: {{ word }}",
)

PART_OF_SPEECH = PromptTemplate(
    name="part_of_speech",
    system=(
        "Identify the part of speech for the given {{ source_language }} word. "
        "Return only the part of speech (e.g., \"noun\", \"verb\", \"adjective\", \"adverb\", etc.)."
    ),
    user="{{ source_language }} word: {{ word }}",
)

ARTICLED_WORD = PromptTemplate(
    name="articled_word",
    system=(
        "If the given {{ source_language }} word is a noun and {{ source_language }} nouns take a definite article, "
        "return the word in its dictionary form preceded by its definite article, "
        "with the noun capitalized as {{ source_language }} spelling requires. "
        "Otherwise return the word exactly as given. "
        "Only return the word, nothing else."
    ),
    user="{{ source_language }} word: {{ word }}",
)
