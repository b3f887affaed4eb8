"""rollout ライブラリの例外型定義"""

from __future__ import annotations


class RolloutError(Exception):
    """rollout ライブラリのエラー基底クラス。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class RolloutErrorCodes:
    """RolloutError のエラーコード定数。"""

    FEATURE_NOT_EXISTS: str = "FEATURE_NOT_EXISTS"
    INVALID_PERCENTAGE: str = "INVALID_PERCENTAGE"
    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"


class FeatureNotExistsError(RolloutError):
    """フィーチャーが存在しない場合のエラー。"""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            RolloutErrorCodes.FEATURE_NOT_EXISTS,
            f"Feature `{name}` does not exist",
        )


class StoreError(Exception):
    """ストレージバックエンドのエラー。"""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class StoreErrorCodes:
    """StoreError のエラーコード定数。"""

    KEY_NOT_FOUND: str = "KEY_NOT_FOUND"
    CONNECTION_ERROR: str = "CONNECTION_ERROR"
    MALFORMED_RECORD: str = "MALFORMED_RECORD"
