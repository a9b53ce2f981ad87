"""フィーチャーステート値解決のユニットテスト"""

from collections.abc import Sequence

import pytest
from featurestate_engine import (
    EvaluationReason,
    Feature,
    FeatureState,
    FeatureStateValue,
    MultivariateFeatureOption,
    MultivariateFeatureStateValue,
    evaluate,
    object_id_for,
    resolve,
    sorted_multivariate_values,
)


def fixed_oracle(percentage: float):
    def oracle(object_ids: Sequence[str], iterations: int = 1) -> float:
        return percentage

    return oracle


def mv_value(
    value: object, allocation: float, id: int | None = None, uuid: str | None = None
) -> MultivariateFeatureStateValue:
    fields: dict = {
        "multivariate_feature_option": MultivariateFeatureOption(value=value),
        "percentage_allocation": allocation,
        "id": id,
    }
    if uuid is not None:
        fields["mv_fs_value_uuid"] = uuid
    return MultivariateFeatureStateValue(**fields)


def make_state(
    mv_values: list[MultivariateFeatureStateValue] | None = None,
    django_id: int | None = 1,
    value: object = "control",
) -> FeatureState:
    return FeatureState(
        feature=Feature(id=1, name="button_colour"),
        enabled=True,
        django_id=django_id,
        featurestate_uuid="a6ff815f-63ed-4e72-99dc-9124c442ce4d",
        multivariate_feature_state_values=mv_values or [],
        value=value,
    )


def test_no_identity_returns_control_value() -> None:
    """identity が無い場合はベース値を返すこと。"""
    state = make_state([mv_value("a", 100, id=1)])
    result = evaluate(state)
    assert result.value == FeatureStateValue.string("control")
    assert result.reason is EvaluationReason.NO_IDENTITY


def test_no_variants_returns_control_value() -> None:
    """多変量値が無い場合はベース値を返すこと。"""
    state = make_state(value=1)
    result = evaluate(state, "identity-1")
    assert result.value == FeatureStateValue.integer(1)
    assert result.reason is EvaluationReason.NO_VARIANTS
    assert resolve(state, "identity-1") == FeatureStateValue.integer(1)


@pytest.mark.parametrize(
    ("percentage", "expected"),
    [(0.0, "option-1"), (29.999, "option-1"), (30.0, "option-2"), (99.999, "option-2")],
)
def test_boundary_bucketing(percentage: float, expected: str) -> None:
    """割り当て範囲の境界で正しい選択肢が選ばれること。"""
    state = make_state([mv_value("option-2", 70, id=2), mv_value("option-1", 30, id=1)])
    result = evaluate(state, "identity-1", hash_oracle=fixed_oracle(percentage))
    assert result.value == FeatureStateValue.string(expected)
    assert result.reason is EvaluationReason.VARIANT_MATCH


def test_uncovered_percentage_falls_back_to_control() -> None:
    """割り当て合計がパーセンテージに届かない場合はベース値を返すこと。"""
    state = make_state([mv_value("a", 10, id=1), mv_value("b", 10, id=2)])
    result = evaluate(state, "identity-1", hash_oracle=fixed_oracle(50.0))
    assert result.value == FeatureStateValue.string("control")
    assert result.reason is EvaluationReason.ALLOCATION_FALLBACK


def test_degenerate_allocations_fall_back() -> None:
    """負やゼロの割り当てでも例外にならないこと。"""
    state = make_state([mv_value("a", 0, id=1), mv_value("b", -5, id=2)])
    result = evaluate(state, "identity-1", hash_oracle=fixed_oracle(0.0))
    assert result.reason is EvaluationReason.ALLOCATION_FALLBACK


def test_ids_sorted_as_text() -> None:
    """ID は数値ではなく文字列として並ぶこと（10 < 2 < 9）。"""
    state = make_state(
        [mv_value("two", 10, id=2), mv_value("ten", 10, id=10), mv_value("nine", 10, id=9)]
    )
    assert [v.id for v in sorted_multivariate_values(state)] == [10, 2, 9]
    assert resolve(state, "i", hash_oracle=fixed_oracle(5)) == FeatureStateValue.string("ten")
    assert resolve(state, "i", hash_oracle=fixed_oracle(15)) == FeatureStateValue.string("two")
    assert resolve(state, "i", hash_oracle=fixed_oracle(25)) == FeatureStateValue.string("nine")


def test_values_without_id_sorted_by_uuid() -> None:
    """ID が無い値は UUID 順に並ぶこと。"""
    state = make_state(
        [
            mv_value("b", 50, uuid="bbbbbbbb-0000-4000-8000-000000000000"),
            mv_value("a", 50, uuid="aaaaaaaa-0000-4000-8000-000000000000"),
        ]
    )
    assert resolve(state, "i", hash_oracle=fixed_oracle(10)) == FeatureStateValue.string("a")


def test_evaluation_does_not_reorder_state() -> None:
    """評価でステートの順序が変わらないこと。"""
    values = [mv_value("b", 50, id=2), mv_value("a", 50, id=1)]
    state = make_state(values)
    evaluate(state, "identity-1")
    assert list(state.multivariate_feature_state_values) == values


def test_object_id_uses_django_id_then_uuid() -> None:
    """バケッティングキーは django_id、無ければ UUID であること。"""
    assert object_id_for(make_state(django_id=12)) == "12"
    assert object_id_for(make_state(django_id=None)) == "a6ff815f-63ed-4e72-99dc-9124c442ce4d"


def test_oracle_receives_object_and_identity_ids() -> None:
    """ハッシュには [object_id, identity_id] と iterations=1 が渡ること。"""
    received: list[tuple[list[str], int]] = []

    def recording_oracle(object_ids: Sequence[str], iterations: int = 1) -> float:
        received.append((list(object_ids), iterations))
        return 0.0

    evaluate(make_state([mv_value("a", 100, id=1)], django_id=None), "user-9", recording_oracle)
    assert received == [(["a6ff815f-63ed-4e72-99dc-9124c442ce4d", "user-9"], 1)]


def test_resolution_is_deterministic() -> None:
    """同じステートと identity には常に同じ値を返すこと。"""
    state = make_state([mv_value("a", 33.3, id=1), mv_value("b", 33.3, id=2), mv_value("c", 33.4, id=3)])
    for identity in ("identity-1", "identity-2", "user@example.com"):
        first = resolve(state, identity)
        assert first in {FeatureStateValue.string(s) for s in ("a", "b", "c")}
        assert all(resolve(state, identity) == first for _ in range(5))


def test_get_value_delegates_to_engine() -> None:
    """FeatureState.get_value が resolve と同じ結果を返すこと。"""
    state = make_state([mv_value("a", 50, id=1), mv_value("b", 50, id=2)])
    assert state.get_value() == FeatureStateValue.string("control")
    assert state.get_value("identity-1") == resolve(state, "identity-1")
    assert state.get_value("x", hash_oracle=fixed_oracle(75)) == FeatureStateValue.string("b")


def test_result_carries_feature_flags() -> None:
    """評価結果にフィーチャー名と有効状態が含まれること。"""
    result = evaluate(make_state(), None)
    assert result.feature_name == "button_colour"
    assert result.enabled is True
