from typing import Any, NoReturn

import jinja2


def jinja2_raise(message: str) -> NoReturn:
    """Lets a template abort rendering: `{{ fail('...') }}`."""
    raise jinja2.TemplateRuntimeError(message)


class PromptRenderer:
    _env = jinja2.Environment(
        undefined=jinja2.StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
        autoescape=False,
    )
    _env.globals["fail"] = jinja2_raise

    @classmethod
    def render(cls, template: str, context: dict[str, Any]) -> str:
        return cls._env.from_string(template).render(**context)
