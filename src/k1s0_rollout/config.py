"""rollout 設定（pydantic BaseModel）と YAML 読み込み"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from .exceptions import RolloutError, RolloutErrorCodes


class LogSection(BaseModel):
    """ログ設定。"""

    level: str = "INFO"
    format: Literal["json", "text"] = "json"


class RolloutConfig(BaseModel):
    """rollout 設定全体。"""

    # ユーザーオブジェクトから ID を読み取る属性名
    id_attribute: str = Field(default="id", min_length=1)
    key_prefix: str = ""
    # True の場合 enable_percentage は既存の groups/users を保持する
    merge_percentage: bool = False
    log: LogSection = Field(default_factory=LogSection)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """override を優先して base とディープマージした新しい辞書を返す。"""
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise RolloutError(
            code=RolloutErrorCodes.READ_FILE,
            message=f"Failed to read config file: {path}",
            cause=e,
        ) from e
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise RolloutError(
            code=RolloutErrorCodes.PARSE_YAML,
            message=f"Failed to parse YAML: {path}",
            cause=e,
        ) from e
    if not isinstance(data, dict):
        raise RolloutError(
            code=RolloutErrorCodes.PARSE_YAML,
            message=f"Config root must be a mapping: {path}",
        )
    return data


def load_config(base_path: Path, env_path: Path | None = None) -> RolloutConfig:
    """設定ファイルを読み込んで RolloutConfig を返す。

    base_path: ベース設定ファイルパス（必須）
    env_path: 環境別設定ファイルパス（オプション）。存在する場合はベースにマージ。

    ファイルのトップレベルに rollout キーがあればその配下を設定として扱う。
    """
    data = _read_yaml(base_path)
    if env_path is not None and env_path.exists():
        data = _deep_merge(data, _read_yaml(env_path))
    section = data.get("rollout", data)
    try:
        return RolloutConfig.model_validate(section)
    except ValidationError as e:
        raise RolloutError(
            code=RolloutErrorCodes.VALIDATION,
            message=f"Config validation failed: {e}",
            cause=e,
        ) from e
