"""featurestate engine library."""

from .client import FeatureStateClientProtocol
from .codec import dump_feature_state, dumps_feature_state, load_feature_state
from .config import EngineConfig, LogSection, deep_merge, load_config
from .engine import evaluate, object_id_for, resolve, sorted_multivariate_values
from .exceptions import FeatureStateError, FeatureStateErrorCodes
from .hashing import HashOracle, get_hashed_percentage_for_object_ids
from .logger import init_logging, new_logger
from .memory import InMemoryFeatureStateClient
from .models import (
    EvaluationReason,
    EvaluationResult,
    Feature,
    FeatureState,
    MultivariateFeatureOption,
    MultivariateFeatureStateValue,
)
from .utils import get_uuid
from .values import DynamicValue, FeatureStateValue, ValueKind

__all__ = [
    "DynamicValue",
    "EngineConfig",
    "EvaluationReason",
    "EvaluationResult",
    "Feature",
    "FeatureState",
    "FeatureStateClientProtocol",
    "FeatureStateError",
    "FeatureStateErrorCodes",
    "FeatureStateValue",
    "HashOracle",
    "InMemoryFeatureStateClient",
    "LogSection",
    "MultivariateFeatureOption",
    "MultivariateFeatureStateValue",
    "ValueKind",
    "deep_merge",
    "dump_feature_state",
    "dumps_feature_state",
    "evaluate",
    "get_hashed_percentage_for_object_ids",
    "get_uuid",
    "init_logging",
    "load_config",
    "load_feature_state",
    "new_logger",
    "object_id_for",
    "resolve",
    "sorted_multivariate_values",
]
