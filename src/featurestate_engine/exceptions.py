"""featurestate_engine の例外型定義"""

from __future__ import annotations


class FeatureStateError(Exception):
    """featurestate_engine のエラー基底クラス。"""

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


class FeatureStateErrorCodes:
    """エラーコード定数。"""

    DECODE: str = "DECODE_ERROR"
    INVALID_VALUE_TYPE: str = "INVALID_VALUE_TYPE"
    INVALID_ARGUMENT: str = "INVALID_ARGUMENT"
    FEATURE_NOT_FOUND: str = "FEATURE_NOT_FOUND"
    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    CONFIG_VALIDATION: str = "CONFIG_VALIDATION_ERROR"
