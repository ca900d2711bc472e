from __future__ import annotations

import logging

from .config import AppConfig
from .di import AppContainer

logger = logging.getLogger(__name__)


def configure_logging(config: AppConfig) -> None:
    # stdout carries the LSP stream, so logs go to stderr or a file
    kwargs: dict[str, object] = {
        "level": getattr(logging, config.log_level.upper(), logging.INFO),
        "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
    }
    if config.log_file is not None:
        kwargs["filename"] = str(config.log_file)
    logging.basicConfig(**kwargs)  # type: ignore[arg-type]


def main() -> None:
    config = AppConfig()
    config.ensure_dirs()
    configure_logging(config)

    container = AppContainer.build(config)
    server = container.create_server()
    logger.info("AI Debugger language server started, endpoint %s", config.endpoint_url)
    server.start_io()


if __name__ == "__main__":
    main()
