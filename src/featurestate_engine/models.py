"""フィーチャーステートのデータモデル（pydantic BaseModel）"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Annotated

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, StrictBool, StrictInt

from .hashing import HashOracle, get_hashed_percentage_for_object_ids
from .utils import get_uuid
from .values import DynamicValue, FeatureStateValue

# 永続化済みエンティティの ID
PersistedId = Annotated[StrictInt, Field(ge=0)]

# 割り当て率。JSON の整数は受け付け、文字列や真偽値は受け付けない
PercentageAllocation = Annotated[float, Field(strict=True)]


class Feature(BaseModel):
    """フィーチャー定義。"""

    model_config = ConfigDict(frozen=True)

    id: PersistedId
    name: str
    type: str | None = None


class MultivariateFeatureOption(BaseModel):
    """多変量フラグの選択肢。"""

    model_config = ConfigDict(frozen=True)

    value: DynamicValue
    id: PersistedId | None = None


class MultivariateFeatureStateValue(BaseModel):
    """フィーチャーステート内での選択肢と割り当て率の組。"""

    model_config = ConfigDict(frozen=True)

    multivariate_feature_option: MultivariateFeatureOption
    percentage_allocation: PercentageAllocation
    id: PersistedId | None = None
    mv_fs_value_uuid: str = Field(default_factory=get_uuid)

    @property
    def sort_key(self) -> str:
        """評価順を決める文字列キー（ID があれば ID の文字列表現）。"""
        if self.id is not None:
            return str(self.id)
        return self.mv_fs_value_uuid


class FeatureState(BaseModel):
    """評価可能なフィーチャーの一状態。

    ベース値は入力時に ``feature_state_value`` または ``value`` キーを受け付け、
    出力時は常に ``feature_state_value`` を使う。
    """

    model_config = ConfigDict(frozen=True)

    feature: Feature
    enabled: StrictBool
    django_id: PersistedId | None = None
    featurestate_uuid: str = Field(default_factory=get_uuid)
    multivariate_feature_state_values: tuple[MultivariateFeatureStateValue, ...] = ()
    value: DynamicValue = Field(
        default_factory=FeatureStateValue.none,
        validation_alias=AliasChoices("feature_state_value", "value"),
        serialization_alias="feature_state_value",
    )

    def get_value(
        self,
        identity_id: str | None = None,
        hash_oracle: HashOracle = get_hashed_percentage_for_object_ids,
    ) -> FeatureStateValue:
        """identity に対して提供する値を返す。"""
        from .engine import resolve

        return resolve(self, identity_id, hash_oracle=hash_oracle)


class EvaluationReason(Enum):
    """評価結果の理由。"""

    NO_IDENTITY = "NO_IDENTITY"
    NO_VARIANTS = "NO_VARIANTS"
    VARIANT_MATCH = "VARIANT_MATCH"
    ALLOCATION_FALLBACK = "ALLOCATION_FALLBACK"


@dataclass(frozen=True)
class EvaluationResult:
    """フィーチャーステート評価結果。"""

    feature_name: str
    enabled: bool
    value: FeatureStateValue
    reason: EvaluationReason
