"""Enumerations shared by the domain models, services and API schemas.

Values are the literal strings exposed on the wire, so renaming a member
never changes the payload contract.
"""

from enum import StrEnum

# ── Crop reference enums ────────────────────────────────────────────────────


class CropCategoryEnum(StrEnum):
    """Agronomic grouping of a reference crop."""

    cereal = "Cereal"
    pulse = "Pulse"
    fruit = "Fruit"
    cash_crop = "Cash Crop"
    oilseed = "Oilseed"
    vegetable = "Vegetable"


# ── Recommendation enums ────────────────────────────────────────────────────


class RecommendationSourceEnum(StrEnum):
    """Which tier produced a recommendation."""

    dataset = "dataset"
    kaggle = "kaggle"
    kaggle_enhanced = "kaggle-enhanced"
    model = "model"
    rule_based = "rule-based"


class MatchPhaseEnum(StrEnum):
    """Historical-dataset matching phase that produced the working set."""

    exact = "exact"
    nearest = "nearest"


# ── Sensor enums ────────────────────────────────────────────────────────────


class SensorSourceEnum(StrEnum):
    """Origin of a sensor snapshot."""

    webhook = "webhook"
    polling = "polling"


class SecurityStatusEnum(StrEnum):
    """Field security state derived from the PIR and flame sensors."""

    safe = "safe"
    warning = "warning"
    critical = "critical"
