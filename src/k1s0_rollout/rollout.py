"""Rollout — パーセンテージ・グループ・ユーザー単位でフィーチャーを段階公開する"""

from __future__ import annotations

import logging
import zlib
from collections.abc import Iterable, Mapping
from typing import Any

from .backend import FeatureBackend
from .config import RolloutConfig
from .exceptions import FeatureNotExistsError, RolloutError, RolloutErrorCodes
from .identity import GroupValidator, IdentityAccessor, extract_id
from .memory import InMemoryFeatureBackend
from .models import Feature, Group
from .store import FeatureStore

logger = logging.getLogger(__name__)


def bucket(user_id: str, name: str) -> int:
    """CRC32(user_id + name) % 100 を返す。同じ入力には常に同じ値を返す。"""
    checksum = zlib.crc32(f"{user_id}{name}".encode("utf-8")) & 0xFFFFFFFF
    return checksum % 100


def _as_list(value: Any) -> list[Any]:
    # 文字列・辞書は 1 要素として扱う
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
        return [value]
    return list(value)


def _is_integral(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return value.is_integer()
    return isinstance(value, int)


def _remove_first(items: list[str], values: Iterable[str]) -> None:
    for value in values:
        if value in items:
            items.remove(value)


class Rollout:
    """フィーチャーの有効/無効を判定し、その状態を更新するエンジン。

    判定は group -> user -> percentage の優先順で行う。更新はすべて
    1 キーに対する read-modify-write で、同一フィーチャーへの同時更新は
    後勝ちになる。
    """

    def __init__(
        self,
        backend: FeatureBackend | None = None,
        config: RolloutConfig | None = None,
        identity_accessor: IdentityAccessor | None = None,
    ) -> None:
        self._config = config or RolloutConfig()
        self._store = FeatureStore(
            backend or InMemoryFeatureBackend(),
            key_prefix=self._config.key_prefix,
        )
        self._identity_accessor = identity_accessor or extract_id
        self.groups: list[Group] = []

    async def get(self, name: str) -> Feature:
        """フィーチャーレコードを取得する。

        Raises:
            FeatureNotExistsError: レコードが存在しない場合
        """
        feature = await self._store.get(name)
        if feature is None:
            raise FeatureNotExistsError(name)
        return feature

    def group(self, name: str, validator: GroupValidator) -> None:
        """グループを登録する。同名のグループも重複して追加される。"""
        self.groups.append(Group(name=name, validator=validator))

    async def enable(self, name: str) -> None:
        """全ユーザーに対してフィーチャーを有効にする。"""
        await self.enable_percentage(name, 100)

    async def disable(self, name: str) -> None:
        """全ユーザーに対してフィーチャーを無効にする。レコードは削除される。"""
        await self._store.destroy(name)
        logger.debug("Feature disabled", extra={"feature": name, "operation": "disable"})

    async def enable_percentage(self, name: str, percentage: int) -> None:
        """一定割合のユーザーに対してフィーチャーを有効にする。

        既定ではレコードを {percentage} だけで上書きし、groups/users は破棄する。
        config.merge_percentage が True の場合は既存レコードの percentage のみ置き換える。
        """
        if (
            not isinstance(percentage, int)
            or isinstance(percentage, bool)
            or not 0 <= percentage <= 100
        ):
            raise RolloutError(
                RolloutErrorCodes.INVALID_PERCENTAGE,
                f"Percentage must be an integer between 0 and 100, got {percentage!r}",
            )
        if self._config.merge_percentage:
            feature = await self._read_or_default(name)
            feature.percentage = percentage
        else:
            feature = Feature(percentage=percentage)
        await self._store.set(name, feature)
        logger.debug(
            "Feature percentage enabled",
            extra={"feature": name, "operation": "enable_percentage", "percentage": percentage},
        )

    async def enable_groups(self, name: str, groups: str | Iterable[str]) -> None:
        """グループに対してフィーチャーを有効にする。レコードがなければ作成する。"""
        names = _as_list(groups)
        feature = await self._read_or_default(name)
        if feature.groups is None:
            feature.groups = []
        feature.groups.extend(names)
        await self._store.set(name, feature)
        logger.debug(
            "Feature groups enabled",
            extra={"feature": name, "operation": "enable_groups", "groups": names},
        )

    async def enable_group(self, name: str, group: str | Iterable[str]) -> None:
        await self.enable_groups(name, group)

    async def disable_groups(self, name: str, groups: str | Iterable[str]) -> None:
        """グループに対してフィーチャーを無効にする。

        各グループ名の最初の出現だけを取り除く。

        Raises:
            FeatureNotExistsError: レコードが存在しない場合
        """
        names = _as_list(groups)
        feature = await self.get(name)
        if feature.groups is None:
            return
        _remove_first(feature.groups, names)
        await self._store.set(name, feature)
        logger.debug(
            "Feature groups disabled",
            extra={"feature": name, "operation": "disable_groups", "groups": names},
        )

    async def disable_group(self, name: str, group: str | Iterable[str]) -> None:
        await self.disable_groups(name, group)

    async def enable_users(self, name: str, users: Any) -> None:
        """特定ユーザーに対してフィーチャーを有効にする。

        users は ID（str/int）、ユーザーオブジェクト、またはそれらのリスト。
        ID が空になるものは無視する。
        """
        ids = self._ids(users)
        feature = await self._read_or_default(name)
        if feature.users is None:
            feature.users = []
        feature.users.extend(ids)
        await self._store.set(name, feature)
        logger.debug(
            "Feature users enabled",
            extra={"feature": name, "operation": "enable_users", "users": ids},
        )

    async def enable_user(self, name: str, user: Any) -> None:
        await self.enable_users(name, user)

    async def disable_users(self, name: str, users: Any) -> None:
        """特定ユーザーに対してフィーチャーを無効にする。

        Raises:
            FeatureNotExistsError: レコードが存在しない場合
        """
        ids = self._ids(users)
        feature = await self.get(name)
        if feature.users is None:
            return
        _remove_first(feature.users, ids)
        await self._store.set(name, feature)
        logger.debug(
            "Feature users disabled",
            extra={"feature": name, "operation": "disable_users", "users": ids},
        )

    async def disable_user(self, name: str, user: Any) -> None:
        await self.disable_users(name, user)

    async def is_enabled(self, name: str, user: Any = None) -> bool:
        """フィーチャーが有効か判定する。

        判定中のエラーはすべて False として扱い、呼び出し元には送出しない。
        """
        try:
            return await self._evaluate(name, user)
        except Exception as e:
            logger.warning(
                "Feature evaluation failed",
                extra={"feature": name, "error": str(e)},
            )
            return False

    async def _evaluate(self, name: str, user: Any) -> bool:
        feature = await self._store.get(name)
        if feature is None or feature.is_empty():
            return False

        if user is not None and feature.groups:
            if any(group in feature.groups for group in self._matching_groups(user)):
                return True

        user_id = self._extract_id(user)

        if user is not None and feature.users:
            if user_id in feature.users:
                return True

        percentage = feature.percentage
        if _is_integral(percentage):
            return bucket(user_id, name) < percentage

        return False

    def _matching_groups(self, user: Any) -> list[str]:
        matched: list[str] = []
        for group in self.groups:
            try:
                if group.validator(user):
                    matched.append(group.name)
            except Exception as e:
                logger.warning(
                    "Group validator failed",
                    extra={"group": group.name, "error": str(e)},
                )
        return matched

    def _extract_id(self, user: Any) -> str:
        return self._identity_accessor(user, self._config.id_attribute)

    def _ids(self, users: Any) -> list[str]:
        ids = (self._extract_id(user) for user in _as_list(users))
        return [user_id for user_id in ids if user_id]

    async def _read_or_default(self, name: str) -> Feature:
        feature = await self._store.get(name)
        return feature if feature is not None else Feature()
