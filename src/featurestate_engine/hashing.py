"""決定的ハッシュによるパーセンテージ算出"""

from __future__ import annotations

import hashlib
from collections.abc import Sequence
from typing import Protocol

from .exceptions import FeatureStateError, FeatureStateErrorCodes


class HashOracle(Protocol):
    """識別子列を [0, 100) の浮動小数点数へ写像する純粋関数のプロトコル。

    同じ入力には常に同じ値を返し、異なる識別子に対してはほぼ一様に分布すること。
    """

    def __call__(self, object_ids: Sequence[str], iterations: int = 1) -> float: ...


def get_hashed_percentage_for_object_ids(
    object_ids: Sequence[str], iterations: int = 1
) -> float:
    """識別子列から 0 以上 100 未満のパーセンテージを算出する。

    識別子をカンマで連結した文字列を iterations 回繰り返し、その MD5 を
    9999 で剰余して 0〜100 に正規化する。結果がちょうど 100 になった場合は
    iterations を 1 増やして再計算する。

    Args:
        object_ids: ハッシュ対象の識別子（順序に意味がある）
        iterations: 連結文字列の繰り返し回数（1 以上）

    Returns:
        [0, 100) のパーセンテージ
    """
    if iterations < 1:
        raise FeatureStateError(
            FeatureStateErrorCodes.INVALID_ARGUMENT,
            f"iterations must be >= 1, got {iterations}",
        )
    to_hash = ",".join(str(object_id) for object_id in object_ids) * iterations
    digest = hashlib.md5(to_hash.encode("utf-8"), usedforsecurity=False).hexdigest()
    value = (int(digest, 16) % 9999) / 9998 * 100
    if value == 100:
        return get_hashed_percentage_for_object_ids(object_ids, iterations + 1)
    return value
