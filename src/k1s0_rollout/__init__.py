"""k1s0 rollout library."""

from .backend import FeatureBackend
from .config import LogSection, RolloutConfig, load_config
from .exceptions import (
    FeatureNotExistsError,
    RolloutError,
    RolloutErrorCodes,
    StoreError,
    StoreErrorCodes,
)
from .identity import GroupValidator, IdentityAccessor, extract_id
from .logger import new_logger, new_logger_from_config
from .memory import InMemoryFeatureBackend
from .models import Feature, Group
from .rollout import Rollout, bucket
from .store import FeatureStore

__all__ = [
    "Feature",
    "FeatureBackend",
    "FeatureNotExistsError",
    "FeatureStore",
    "Group",
    "GroupValidator",
    "IdentityAccessor",
    "InMemoryFeatureBackend",
    "LogSection",
    "Rollout",
    "RolloutConfig",
    "RolloutError",
    "RolloutErrorCodes",
    "StoreError",
    "StoreErrorCodes",
    "bucket",
    "extract_id",
    "load_config",
    "new_logger",
    "new_logger_from_config",
]
