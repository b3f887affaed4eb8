"""ロガー設定のユニットテスト"""

import io
import json
import logging

from k1s0_rollout import Rollout, RolloutConfig, new_logger, new_logger_from_config
from k1s0_rollout.config import LogSection


def test_new_logger_json_format() -> None:
    """JSON フォーマットのロガーが作成できること。"""
    logger = new_logger(level="INFO", format="json")
    assert logger is not None


def test_new_logger_text_format() -> None:
    """テキストフォーマットのロガーが作成できること。"""
    logger = new_logger(level="DEBUG", format="text")
    assert logger is not None


def test_new_logger_sets_library_level() -> None:
    """ライブラリのロガーにレベルが設定されること。"""
    new_logger(level="WARNING")
    assert logging.getLogger("k1s0_rollout").level == logging.WARNING


def test_new_logger_from_config() -> None:
    """RolloutConfig.log の設定が反映されること。"""
    config = RolloutConfig(log=LogSection(level="ERROR", format="text"))
    logger = new_logger_from_config(config)
    bound = logger.bind(feature="chat")
    assert bound is not None
    assert logging.getLogger("k1s0_rollout").level == logging.ERROR


async def test_library_events_carry_extra_fields() -> None:
    """ライブラリのイベントが feature/operation を含む JSON で出力されること。"""
    stream = io.StringIO()
    new_logger(level="DEBUG", format="json", stream=stream)
    await Rollout().enable("chat")

    events = [json.loads(line) for line in stream.getvalue().splitlines()]
    event = next(e for e in events if e["event"] == "Feature percentage enabled")
    assert event["feature"] == "chat"
    assert event["operation"] == "enable_percentage"
    assert event["percentage"] == 100
    assert event["level"] == "debug"
    assert event["logger"] == "k1s0_rollout.rollout"


async def test_validator_failure_logged_with_group() -> None:
    """バリデーター失敗の警告に group と error が含まれること。"""
    stream = io.StringIO()
    new_logger(level="WARNING", format="json", stream=stream)
    rollout = Rollout()

    def broken(user: object) -> bool:
        raise RuntimeError("boom")

    rollout.group("broken", broken)
    await rollout.enable_group("chat", "broken")
    assert await rollout.is_enabled("chat", 1) is False

    events = [json.loads(line) for line in stream.getvalue().splitlines()]
    assert [e["event"] for e in events] == ["Group validator failed"]
    assert events[0]["group"] == "broken"
    assert events[0]["error"] == "boom"
    assert events[0]["level"] == "warning"


def test_structlog_logger_writes_to_stream() -> None:
    """返された structlog ロガーも同じ出力先に書き込むこと。"""
    stream = io.StringIO()
    logger = new_logger(level="INFO", format="json", stream=stream)
    logger.info("rollout configured", key_prefix="features:")

    event = json.loads(stream.getvalue().splitlines()[-1])
    assert event["event"] == "rollout configured"
    assert event["key_prefix"] == "features:"


def test_new_logger_replaces_previous_handler() -> None:
    """再設定時にハンドラーが重複しないこと。"""
    new_logger(stream=io.StringIO())
    new_logger(stream=io.StringIO())
    assert len(logging.getLogger("k1s0_rollout").handlers) == 1
