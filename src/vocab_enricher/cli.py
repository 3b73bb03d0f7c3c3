import sys

import yaml
from pydantic import ValidationError

from .logging import get_logger, setup_logging
from .settings import OutputSettings, Settings
from .pipeline import Pipeline
from .regenerate import ImageRegenerator


def _log_settings(settings: OutputSettings) -> None:
    get_logger("vocab_enricher.cli").info(
        "Settings loaded:\n%s",
        yaml.safe_dump(
            settings.model_dump(mode="json"),
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        ),
    )


def _load_settings(settings_cls: type[OutputSettings]) -> OutputSettings:
    try:
        return settings_cls()
    except ValidationError as e:
        setup_logging()
        missing = ", ".join(
            str(err["loc"][0]).upper() for err in e.errors() if err["type"] == "missing"
        )
        logger = get_logger("vocab_enricher.cli")
        if missing:
            logger.error("Missing required configuration (environment or .env): %s", missing)
        else:
            logger.error("Invalid configuration: %s", e)
        sys.exit(1)


def app() -> None:
    """CLI entrypoint: enrich the input CSV.
    Configuration comes from environment variables and `.env` only.
    """
    settings = _load_settings(Settings)
    setup_logging(settings.log_level)
    _log_settings(settings)
    logger = get_logger("vocab_enricher.cli")

    try:
        Pipeline(settings).run()
    except Exception as e:
        logger.error("Error in main process: %s", e)
        sys.exit(1)


def regenerate_image_app() -> None:
    """CLI entrypoint: interactively regenerate the image of one word in the output CSV."""
    settings = _load_settings(OutputSettings)
    setup_logging(settings.log_level)
    logger = get_logger("vocab_enricher.cli")

    try:
        ImageRegenerator(settings).run()
    except Exception as e:
        logger.error("Error during image regeneration: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    app()
