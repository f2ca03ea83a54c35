"""Pydantic schemas for the in-process model prediction endpoint."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from app.schemas.common import CamelModel
from app.schemas.recommendations import FieldReadingIn


class ModelPredictRequest(CamelModel):
	inputs: FieldReadingIn


class IdealConditions(CamelModel):
	moisture: str
	temperature: str
	humidity: str


class ModelPredictResponse(CamelModel):
	predictions: list[str] = Field(default_factory=list)
	recommendations: list[str] = Field(default_factory=list)
	confidence: float = Field(ge=0.0, le=1.0)
	crop: str
	score: float
	soil_type: str
	npk_ratio: str
	irrigation_schedule: str
	ideal_conditions: IdealConditions
	source: Literal["model"] = "model"
	timestamp: datetime
