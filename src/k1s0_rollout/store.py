"""FeatureStore — バックエンドに対する薄い非同期アダプター"""

from __future__ import annotations

from .backend import FeatureBackend
from .exceptions import StoreError, StoreErrorCodes
from .models import Feature


class FeatureStore:
    """フィーチャー名をストレージキーに変換し、KEY_NOT_FOUND を None に正規化する。"""

    def __init__(self, backend: FeatureBackend, key_prefix: str = "") -> None:
        self._backend = backend
        self._key_prefix = key_prefix

    def key(self, name: str) -> str:
        """フィーチャー名に対応するストレージキーを返す。"""
        return f"{self._key_prefix}{name}"

    async def get(self, name: str) -> Feature | None:
        """レコードを取得する。存在しなければ None。

        KEY_NOT_FOUND 以外のバックエンドエラーはそのまま送出する。
        """
        try:
            data = await self._backend.get(self.key(name))
        except StoreError as e:
            if e.code == StoreErrorCodes.KEY_NOT_FOUND:
                return None
            raise
        return Feature.from_dict(data)

    async def set(self, name: str, feature: Feature) -> None:
        """レコードを丸ごと上書きする。"""
        await self._backend.set(self.key(name), feature.to_dict())

    async def destroy(self, name: str) -> None:
        """レコードを削除する。"""
        await self._backend.destroy(self.key(name))
