"""rollout ライブラリのログ出力設定（structlog + stdlib logging）"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

from .config import RolloutConfig

LOGGER_NAME = "k1s0_rollout"

_handler: logging.Handler | None = None


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]


def new_logger(
    level: str = "INFO",
    format: str = "json",
    stream: TextIO | None = None,
) -> structlog.stdlib.BoundLogger:
    """k1s0_rollout ロガーにハンドラーを設定し、structlog ロガーを返す。

    ライブラリ内部の stdlib logging レコードも structlog の
    ProcessorFormatter を通して出力し、extra に渡したフィールド
    （feature, operation など）をイベントのキーとして残す。
    再呼び出し時は前回追加したハンドラーを置き換える。

    Args:
        level: ログレベル ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        format: 出力形式 ("json" or "text")
        stream: 出力先。省略時は sys.stdout

    Returns:
        k1s0_rollout に紐づく structlog.stdlib.BoundLogger
    """
    global _handler

    renderer: structlog.types.Processor
    if format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[*_shared_processors(), structlog.stdlib.ExtraAdder()],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(formatter)

    library_logger = logging.getLogger(LOGGER_NAME)
    if _handler is not None:
        library_logger.removeHandler(_handler)
    library_logger.addHandler(handler)
    library_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    # ルートロガーでの二重出力を防ぐ
    library_logger.propagate = False
    _handler = handler

    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    return structlog.stdlib.get_logger(LOGGER_NAME)


def new_logger_from_config(
    config: RolloutConfig, stream: TextIO | None = None
) -> structlog.stdlib.BoundLogger:
    """RolloutConfig.log の設定でロガーを作成する。"""
    return new_logger(level=config.log.level, format=config.log.format, stream=stream)
