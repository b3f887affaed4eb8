"""FeatureBackend 抽象基底クラス"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class FeatureBackend(ABC):
    """フィーチャーレコードを保持するキーバリューストアの抽象基底クラス。

    値は JSON 互換の辞書。キー単位で read-your-writes であることを前提とする。
    """

    @abstractmethod
    async def get(self, key: str) -> dict[str, Any]:
        """キーに対応する値を取得する。存在しなければ StoreError(KEY_NOT_FOUND)。"""
        ...

    @abstractmethod
    async def set(self, key: str, value: dict[str, Any]) -> None:
        """キーの値を丸ごと上書きする。"""
        ...

    @abstractmethod
    async def destroy(self, key: str) -> None:
        """キーを削除する。存在しないキーの削除はエラーにしない。"""
        ...
