"""アイデンティティからの ID 抽出"""

from __future__ import annotations

from typing import Any, Callable

# (identity, id_attribute) -> ID 文字列
IdentityAccessor = Callable[[Any, str], str]

# identity -> グループに属するか（同期）
GroupValidator = Callable[[Any], bool]


def extract_id(identity: Any, id_attribute: str = "id") -> str:
    """identity から ID 文字列を抽出する。

    - str はそのまま、int はその文字列表現を ID とする。
    - get() を持つオブジェクト（dict など）は get(id_attribute) の値を使う。
    - それ以外のオブジェクトは属性 id_attribute の値を使う。
    - ID が得られない場合は空文字列。
    """
    if identity is None or isinstance(identity, bool):
        return ""
    if isinstance(identity, str):
        return identity
    if isinstance(identity, int):
        return str(identity)

    getter = getattr(identity, "get", None)
    if callable(getter):
        value = getter(id_attribute)
    else:
        value = getattr(identity, id_attribute, None)

    if value is None or isinstance(value, bool):
        return ""
    return str(value)
