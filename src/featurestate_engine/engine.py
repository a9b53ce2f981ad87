"""フィーチャーステート値の解決（多変量バケッティング）"""

from __future__ import annotations

import logging

from .hashing import HashOracle, get_hashed_percentage_for_object_ids
from .models import (
    EvaluationReason,
    EvaluationResult,
    FeatureState,
    MultivariateFeatureStateValue,
)
from .values import FeatureStateValue

logger = logging.getLogger(__name__)


def object_id_for(state: FeatureState) -> str:
    """バケッティングに使うフィーチャーステートの識別子を返す。"""
    if state.django_id is not None:
        return str(state.django_id)
    return state.featurestate_uuid


def sorted_multivariate_values(
    state: FeatureState,
) -> list[MultivariateFeatureStateValue]:
    """多変量値を評価順に並べたコピーを返す。

    並び順は ID の文字列表現（ID が無ければ UUID）による辞書順で、
    数値順ではない（例: 10 < 2 < 9）。他の評価系と同じ割り当てを得るため
    この順序を維持する。
    """
    return sorted(state.multivariate_feature_state_values, key=lambda v: v.sort_key)


def evaluate(
    state: FeatureState,
    identity_id: str | None = None,
    hash_oracle: HashOracle = get_hashed_percentage_for_object_ids,
) -> EvaluationResult:
    """フィーチャーステートを評価し、値とその理由を返す。

    identity が無い場合、または多変量値が無い場合はベース値を返す。
    それ以外は (object_id, identity_id) のハッシュで得たパーセンテージが
    どの割り当て範囲に入るかで値を選ぶ。どの範囲にも入らない場合は
    ベース値にフォールバックする（エラーではない）。

    Args:
        state: 評価対象のフィーチャーステート（変更されない）
        identity_id: リクエスト元の識別子
        hash_oracle: パーセンテージ算出関数

    Returns:
        EvaluationResult
    """
    if identity_id is None:
        return _result(state, state.value, EvaluationReason.NO_IDENTITY)
    if not state.multivariate_feature_state_values:
        return _result(state, state.value, EvaluationReason.NO_VARIANTS)

    object_id = object_id_for(state)
    percentage_value = hash_oracle([object_id, identity_id], 1)

    start_percentage = 0.0
    for mv_value in sorted_multivariate_values(state):
        limit = start_percentage + mv_value.percentage_allocation
        if start_percentage <= percentage_value < limit:
            logger.debug(
                "Multivariate value selected",
                extra={
                    "feature": state.feature.name,
                    "object_id": object_id,
                    "percentage": percentage_value,
                    "mv_fs_value_uuid": mv_value.mv_fs_value_uuid,
                },
            )
            return _result(
                state,
                mv_value.multivariate_feature_option.value,
                EvaluationReason.VARIANT_MATCH,
            )
        start_percentage = limit

    logger.debug(
        "Percentage not covered by allocations, using control value",
        extra={
            "feature": state.feature.name,
            "object_id": object_id,
            "percentage": percentage_value,
            "allocated": start_percentage,
        },
    )
    return _result(state, state.value, EvaluationReason.ALLOCATION_FALLBACK)


def resolve(
    state: FeatureState,
    identity_id: str | None = None,
    hash_oracle: HashOracle = get_hashed_percentage_for_object_ids,
) -> FeatureStateValue:
    """identity に提供する値のみを返す。"""
    return evaluate(state, identity_id, hash_oracle=hash_oracle).value


def _result(
    state: FeatureState, value: FeatureStateValue, reason: EvaluationReason
) -> EvaluationResult:
    return EvaluationResult(
        feature_name=state.feature.name,
        enabled=state.enabled,
        value=value,
        reason=reason,
    )
