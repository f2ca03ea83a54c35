"""Live sensor values held by the push cache.

Pin layout of the field controller:

    V0  soil moisture (%)
    V1  PIR motion (0/1)
    V2  flame (0/1)
    V3  air temperature (°C)
    V4  relative humidity (%)
    V8  soil pH (optional, defaults to 6.8)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from app.models.enums import SecurityStatusEnum, SensorSourceEnum

PIN_SOIL_MOISTURE = "V0"
PIN_PIR = "V1"
PIN_FLAME = "V2"
PIN_TEMPERATURE = "V3"
PIN_HUMIDITY = "V4"
PIN_PH = "V8"

REQUIRED_PINS: tuple[str, ...] = (
    PIN_SOIL_MOISTURE,
    PIN_PIR,
    PIN_FLAME,
    PIN_TEMPERATURE,
    PIN_HUMIDITY,
)
DEFAULT_PH = 6.8

PinValue = float | str


@dataclass(frozen=True, slots=True)
class CachedPinValue:
    token: str
    pin: str
    value: PinValue
    timestamp: float


@dataclass(frozen=True, slots=True)
class SensorSnapshot:
    """Complete set of field readings for one device token."""

    soil_moisture: float
    pir: float
    flame: float
    temperature: float
    humidity: float
    ph: float
    timestamp: datetime
    source: SensorSourceEnum


@dataclass(frozen=True, slots=True)
class SecurityReading:
    pir: float
    flame: float
    status: SecurityStatusEnum
    source: SensorSourceEnum

    @classmethod
    def from_values(cls, pir: float, flame: float, source: SensorSourceEnum) -> "SecurityReading":
        if flame > 0:
            status = SecurityStatusEnum.critical
        elif pir > 0:
            status = SecurityStatusEnum.warning
        else:
            status = SecurityStatusEnum.safe
        return cls(pir=pir, flame=flame, status=status, source=source)


@dataclass(frozen=True, slots=True)
class FieldReading:
    """One observed (moisture, temperature, humidity) triple."""

    moisture: float
    temperature: float
    humidity: float
