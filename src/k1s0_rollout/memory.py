"""InMemoryFeatureBackend 実装"""

from __future__ import annotations

import copy
from typing import Any

from .backend import FeatureBackend
from .exceptions import StoreError, StoreErrorCodes


class InMemoryFeatureBackend(FeatureBackend):
    """インメモリのフィーチャーバックエンド。テストと単一プロセス用。"""

    def __init__(self) -> None:
        self._store: dict[str, dict[str, Any]] = {}

    async def get(self, key: str) -> dict[str, Any]:
        value = self._store.get(key)
        if value is None:
            raise StoreError(StoreErrorCodes.KEY_NOT_FOUND, f"Key not found: {key}")
        return copy.deepcopy(value)

    async def set(self, key: str, value: dict[str, Any]) -> None:
        self._store[key] = copy.deepcopy(value)

    async def destroy(self, key: str) -> None:
        self._store.pop(key, None)

    def keys(self) -> list[str]:
        """保存されているキーの一覧を返す。"""
        return list(self._store)
