"""FeatureStateClient プロトコル"""

from __future__ import annotations

from typing import Protocol

from .models import EvaluationResult, FeatureState
from .values import FeatureStateValue


class FeatureStateClientProtocol(Protocol):
    """フィーチャーステートクライアントプロトコル。"""

    def evaluate(
        self, feature_name: str, identity_id: str | None = None
    ) -> EvaluationResult: ...

    def get_feature_state(self, feature_name: str) -> FeatureState: ...

    def is_enabled(self, feature_name: str) -> bool: ...

    def get_value(
        self, feature_name: str, identity_id: str | None = None
    ) -> FeatureStateValue: ...
