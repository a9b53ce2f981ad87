"""InMemoryFeatureStateClient 実装"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .codec import load_feature_state
from .engine import evaluate
from .exceptions import FeatureStateError, FeatureStateErrorCodes
from .hashing import HashOracle, get_hashed_percentage_for_object_ids
from .models import EvaluationResult, FeatureState
from .values import FeatureStateValue


class InMemoryFeatureStateClient:
    """選択済みのフィーチャーステートをフィーチャー名で保持するクライアント。

    ターゲティングは行わず、フィーチャー名ごとに 1 つのステートのみを持つ。
    """

    def __init__(
        self, hash_oracle: HashOracle = get_hashed_percentage_for_object_ids
    ) -> None:
        self._hash_oracle = hash_oracle
        self._states: dict[str, FeatureState] = {}

    def set_feature_state(self, state: FeatureState) -> None:
        """フィーチャーステートを設定する（同名のものは置き換える）。"""
        self._states[state.feature.name] = state

    def load(self, payloads: Iterable[Mapping[str, Any] | str | bytes]) -> None:
        """ペイロード列をデコードして設定する。"""
        for payload in payloads:
            self.set_feature_state(load_feature_state(payload))

    def get_feature_state(self, feature_name: str) -> FeatureState:
        state = self._states.get(feature_name)
        if state is None:
            raise FeatureStateError(
                FeatureStateErrorCodes.FEATURE_NOT_FOUND,
                f"フィーチャーが見つかりません: {feature_name}",
            )
        return state

    def evaluate(
        self, feature_name: str, identity_id: str | None = None
    ) -> EvaluationResult:
        state = self.get_feature_state(feature_name)
        return evaluate(state, identity_id, hash_oracle=self._hash_oracle)

    def is_enabled(self, feature_name: str) -> bool:
        return self.get_feature_state(feature_name).enabled

    def get_value(
        self, feature_name: str, identity_id: str | None = None
    ) -> FeatureStateValue:
        return self.evaluate(feature_name, identity_id).value
