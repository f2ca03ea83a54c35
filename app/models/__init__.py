"""Domain model registry.

Application code can import every domain type from here::

    from app.models import CropProfile, HistoricalRecord, SensorSnapshot, ...
"""

# ── Crop reference ──────────────────────────────────────────────────────────
from app.models.crops import CropProfile, GrowthRange, PhRange

# ── Historical dataset ──────────────────────────────────────────────────────
from app.models.dataset import (
    HistoricalRecord,
    MatchQuery,
    MatchResult,
    RecommendationGroup,
)

# ── Enums ───────────────────────────────────────────────────────────────────
from app.models.enums import (
    CropCategoryEnum,
    MatchPhaseEnum,
    RecommendationSourceEnum,
    SecurityStatusEnum,
    SensorSourceEnum,
)

# ── Live sensors ────────────────────────────────────────────────────────────
from app.models.sensors import (
    CachedPinValue,
    FieldReading,
    SecurityReading,
    SensorSnapshot,
)

__all__ = [
    "CachedPinValue",
    "CropCategoryEnum",
    "CropProfile",
    "FieldReading",
    "GrowthRange",
    "HistoricalRecord",
    "MatchPhaseEnum",
    "MatchQuery",
    "MatchResult",
    "PhRange",
    "RecommendationGroup",
    "RecommendationSourceEnum",
    "SecurityReading",
    "SecurityStatusEnum",
    "SensorSnapshot",
    "SensorSourceEnum",
]
