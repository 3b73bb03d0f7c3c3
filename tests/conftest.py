import inspect

import pytest

from vocab_enricher.llm.llm_base import GeneratedImage, LLMClient
from vocab_enricher.llm.prompts import PromptTemplate
from vocab_enricher.settings import Settings


class FakeLLMClient(LLMClient):
    """
    In-memory LLM: answers are looked up by prompt template name.
    An answer that is an exception instance is raised instead of returned,
    an async callable is awaited for the answer.
    Unknown templates answer "<template_name>".
    """

    def __init__(self, answers=None, image_url="https://images.example/generated.png", image_data=None):
        super().__init__(source_language="German", target_language="Russian")
        self.answers = answers or {}
        self.image_url = image_url
        self.image_data = image_data
        self.calls: list[tuple[str, dict]] = []
        self.prompts: list[tuple[str, str]] = []
        self.image_prompts: list[str] = []
        self.closed = False
        self._current = ""

    async def ask(self, template: PromptTemplate, **variables: str) -> str:
        self.calls.append((template.name, variables))
        self._current = template.name
        return await super().ask(template, **variables)

    async def _complete(self, system: str, user: str) -> str:
        name = self._current
        self.prompts.append((system, user))
        answer = self.answers.get(name, f"<{name}>")
        if isinstance(answer, Exception):
            raise answer
        if inspect.iscoroutinefunction(answer):
            return await answer()
        return answer

    async def _generate_image(self, prompt: str) -> GeneratedImage | None:
        self.image_prompts.append(prompt)
        if isinstance(self.image_url, Exception):
            raise self.image_url
        if self.image_data is not None:
            return GeneratedImage(data=self.image_data)
        if self.image_url is None:
            return None
        return GeneratedImage(url=self.image_url)

    async def close(self) -> None:
        self.closed = True

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]


@pytest.fixture
def fake_llm():
    return FakeLLMClient()


@pytest.fixture
def make_settings(tmp_path):
    """Build Settings for a run inside tmp_path, ignoring any local .env file."""

    def _make(**overrides) -> Settings:
        values = {
            "openai_api_key": "sk-test",
            "input_csv_path": tmp_path / "input.csv",
            "output_csv_path": tmp_path / "out" / "anki.csv",
            "images_dir": tmp_path / "out" / "images",
            "generate_images": False,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make
