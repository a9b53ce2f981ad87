"""フィーチャーステートのペイロード変換"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from .exceptions import FeatureStateError, FeatureStateErrorCodes
from .models import FeatureState

logger = logging.getLogger(__name__)


def load_feature_state(payload: Mapping[str, Any] | str | bytes) -> FeatureState:
    """ペイロードから FeatureState を復元する。

    payload: デコード済みの dict、または JSON 文字列／バイト列。
    UUID が省略されている場合はこの時点で生成される。
    """
    try:
        if isinstance(payload, (str, bytes)):
            return FeatureState.model_validate_json(payload)
        return FeatureState.model_validate(payload)
    except ValidationError as e:
        logger.debug(
            "Feature state decode failed", extra={"error_count": e.error_count()}
        )
        raise FeatureStateError(
            code=FeatureStateErrorCodes.DECODE,
            message=f"Failed to decode feature state: {e}",
            cause=e,
        ) from e


def dump_feature_state(state: FeatureState) -> dict[str, Any]:
    """FeatureState を JSON 互換の dict に変換する。"""
    return state.model_dump(mode="json", by_alias=True)


def dumps_feature_state(state: FeatureState) -> str:
    """FeatureState を JSON 文字列に変換する。"""
    return state.model_dump_json(by_alias=True)
