"""Logging setup shared by the API and the client session."""

from __future__ import annotations

import logging

_MANAGED_HANDLER_FLAG = "_vision_chat_managed_handler"


def configure_logging(level: str | int = logging.INFO) -> None:
    """Install a single console handler on the root logger.

    Calling it again replaces the handler installed by the previous call instead of
    stacking a second one.
    """

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in list(root_logger.handlers):
        if getattr(handler, _MANAGED_HANDLER_FLAG, False):
            root_logger.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    setattr(console_handler, _MANAGED_HANDLER_FLAG, True)
    root_logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"vision_chat.{name}")
