"""rollout データモデル"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .exceptions import StoreError, StoreErrorCodes
from .identity import GroupValidator


@dataclass
class Feature:
    """フィーチャーレコード。

    すべてのフィールドが None のレコードは「全員に対して無効」と同じ意味。
    """

    percentage: int | None = None
    groups: list[str] | None = None
    users: list[str] | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Feature:
        """永続化形式の辞書からレコードを生成する。未知のキーは無視する。"""
        if not isinstance(data, Mapping):
            raise StoreError(
                StoreErrorCodes.MALFORMED_RECORD,
                f"Feature record must be a mapping, got {type(data).__name__}",
            )
        groups = data.get("groups")
        users = data.get("users")
        return cls(
            percentage=data.get("percentage"),
            groups=list(groups) if groups is not None else None,
            users=list(users) if users is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """永続化形式の辞書を返す。None のフィールドは含めない。"""
        data: dict[str, Any] = {}
        if self.percentage is not None:
            data["percentage"] = self.percentage
        if self.groups is not None:
            data["groups"] = list(self.groups)
        if self.users is not None:
            data["users"] = list(self.users)
        return data

    def is_empty(self) -> bool:
        return self.percentage is None and self.groups is None and self.users is None


@dataclass(frozen=True)
class Group:
    """ユーザーグループ定義。プロセス内でのみ保持され、永続化されない。"""

    name: str
    validator: GroupValidator
