"""Command-line entry point that drives the application through its states."""

from __future__ import annotations

import argparse
import logging
from typing import Any

from cronoscore.application import DEFAULT_CONFIG_PATH, Application
from cronoscore.module import UpdateStatus

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def run(app: Any) -> int:
    """Init, update until a module stops, then clean up; return an exit code."""
    logger.info("-------------- Application Init --------------")
    if not app.on_init():
        logger.error("Application Init exits with ERROR")
        return EXIT_FAILURE

    logger.info("-------------- Application Update --------------")
    while True:
        status = app.on_update()
        if status is UpdateStatus.ERROR:
            logger.error("Application Update exits with ERROR")
            return EXIT_FAILURE
        if status is UpdateStatus.STOP:
            break

    logger.info("-------------- Application CleanUp --------------")
    if not app.on_clean_up():
        logger.error("Application CleanUp exits with ERROR")
        return EXIT_FAILURE
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="cronoscore", description="Run the engine loop.")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="configuration file")
    parser.add_argument("--fps-cap", type=int, default=-1, help="frames per second limit")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    logger.info("Starting Engine...")
    logger.info("-------------- Application Creation --------------")
    app = Application(args.fps_cap, config_path=args.config)
    code = run(app)
    logger.info("Exiting Engine...")
    return code


if __name__ == "__main__":
    raise SystemExit(main())