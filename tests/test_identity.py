"""ID 抽出のユニットテスト"""

from typing import Any

from k1s0_rollout import extract_id


class _Account:
    def __init__(self, **attrs: Any) -> None:
        for key, value in attrs.items():
            setattr(self, key, value)


class _Model:
    """get() アクセサを持つモデル。"""

    def __init__(self, attrs: dict[str, Any]) -> None:
        self._attrs = attrs

    def get(self, key: str) -> Any:
        return self._attrs.get(key)


def test_string_identity() -> None:
    assert extract_id("user-1") == "user-1"
    assert extract_id("") == ""


def test_int_identity() -> None:
    assert extract_id(42) == "42"
    assert extract_id(0) == "0"


def test_mapping_identity() -> None:
    assert extract_id({"id": 7}) == "7"
    assert extract_id({"id": "abc"}) == "abc"
    assert extract_id({"name": "alice"}) == ""


def test_getter_identity() -> None:
    """get() を持つオブジェクトは get() 経由で読むこと。"""
    assert extract_id(_Model({"id": 3})) == "3"
    assert extract_id(_Model({"uid": "x"}), "uid") == "x"


def test_attribute_identity() -> None:
    assert extract_id(_Account(id=5)) == "5"
    assert extract_id(_Account(uid="u-9"), "uid") == "u-9"
    assert extract_id(_Account(name="alice")) == ""


def test_custom_id_attribute() -> None:
    assert extract_id({"id": 1, "email": "a@example.com"}, "email") == "a@example.com"


def test_unusable_identity() -> None:
    """ID を取り出せない値は空文字列。"""
    assert extract_id(None) == ""
    assert extract_id(True) == ""
    assert extract_id({"id": None}) == ""
    assert extract_id({"id": False}) == ""
