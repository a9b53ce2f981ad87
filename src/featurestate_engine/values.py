"""フィーチャーステート値（動的スカラー型）とそのコーデック

値は文字列・真偽値・整数・None のいずれかを取る閉じた和型として表現する。
エンコード時はタグ付きオブジェクトではなく、生のスカラーをそのまま出力する。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any

from pydantic import PlainSerializer, PlainValidator
from pydantic_core import PydanticCustomError

from .exceptions import FeatureStateError, FeatureStateErrorCodes

# i64 の下限から u64 の上限までを整数として受け付ける
_INTEGER_MIN = -(2**63)
_INTEGER_MAX = 2**64 - 1

Scalar = str | bool | int | None


class ValueKind(Enum):
    """値の種別。"""

    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NONE = "none"


_KIND_TYPES: dict[ValueKind, type | None] = {
    ValueKind.STRING: str,
    ValueKind.BOOLEAN: bool,
    ValueKind.INTEGER: int,
    ValueKind.NONE: None,
}


@dataclass(frozen=True)
class FeatureStateValue:
    """フィーチャーステート値。

    等価性とハッシュは (kind, value) の組で定義されるため、
    ``Boolean(True)`` と ``Integer(1)`` は等しくならない。
    """

    kind: ValueKind
    value: Scalar = None

    def __post_init__(self) -> None:
        expected = _KIND_TYPES[self.kind]
        if expected is None:
            ok = self.value is None
        elif expected is int:
            ok = isinstance(self.value, int) and not isinstance(self.value, bool)
        else:
            ok = isinstance(self.value, expected)
        if not ok:
            raise FeatureStateError(
                FeatureStateErrorCodes.INVALID_VALUE_TYPE,
                f"{self.kind.value} 値に {type(self.value).__name__} は指定できません",
            )

    @classmethod
    def string(cls, text: str) -> FeatureStateValue:
        return cls(ValueKind.STRING, text)

    @classmethod
    def boolean(cls, flag: bool) -> FeatureStateValue:
        return cls(ValueKind.BOOLEAN, flag)

    @classmethod
    def integer(cls, number: int) -> FeatureStateValue:
        return cls(ValueKind.INTEGER, number)

    @classmethod
    def none(cls) -> FeatureStateValue:
        return cls(ValueKind.NONE, None)

    @classmethod
    def decode(cls, raw: Any) -> FeatureStateValue:
        """生のスカラーから値を復元する。

        入力スカラーの種別のみで分岐する。配列・オブジェクト・小数部を持つ
        浮動小数点数などは ``INVALID_VALUE_TYPE`` のエラーとなる。

        Args:
            raw: JSON 等からデコードされたスカラー

        Returns:
            対応する FeatureStateValue
        """
        if raw is None:
            return cls.none()
        if isinstance(raw, str):
            return cls.string(raw)
        # bool は int のサブクラスなので先に判定する
        if isinstance(raw, bool):
            return cls.boolean(raw)
        if isinstance(raw, int):
            if _INTEGER_MIN <= raw <= _INTEGER_MAX:
                return cls.integer(raw)
            raise _unexpected("integer out of range")
        if isinstance(raw, float) and math.isfinite(raw) and raw.is_integer():
            return cls.decode(int(raw))
        raise _unexpected(_describe(raw))

    def encode(self) -> Scalar:
        """ラッパーを外した生のスカラーを返す。"""
        return self.value


def _describe(raw: Any) -> str:
    if isinstance(raw, (list, tuple)):
        return "array"
    if isinstance(raw, dict):
        return "object"
    if isinstance(raw, float):
        return "float"
    return type(raw).__name__


def _unexpected(shape: str) -> FeatureStateError:
    return FeatureStateError(
        FeatureStateErrorCodes.INVALID_VALUE_TYPE,
        f"unexpected {shape}, expected a string, boolean, integer or null",
    )


def _validate(raw: Any) -> FeatureStateValue:
    if isinstance(raw, FeatureStateValue):
        return raw
    try:
        return FeatureStateValue.decode(raw)
    except FeatureStateError as e:
        raise PydanticCustomError(
            "feature_state_value_type",
            "{reason}",
            {"reason": str(e)},
        ) from e


def _serialize(value: FeatureStateValue) -> Scalar:
    return value.encode()


# pydantic モデルのフィールドとして使う注釈付き型
DynamicValue = Annotated[
    FeatureStateValue,
    PlainValidator(_validate),
    PlainSerializer(_serialize, return_type=Any),
]
