"""Threshold-based field advisory with an additive risk score.

| dimension      | critical-low | warning-low | optimal   | warning-high | critical-high |
|----------------|--------------|-------------|-----------|--------------|---------------|
| moisture %     | < 30         | < 40        | 40–65/75  | > 75         | —             |
| temperature °C | < 10         | 10–15       | 15–28/30  | > 30         | > 35          |
| humidity %     | < 30         | 30–40       | 40–75     | > 75         | > 85          |

Combined-condition escalations are appended independently of the
per-dimension messages, so one reading can raise several of them.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from app.services.crop_scorer import require_finite

BASE_CONFIDENCE = 0.95
MIN_CONFIDENCE = 0.7
CONFIDENCE_STEP = 0.05


@dataclass(slots=True)
class Assessment:
	messages: list[str] = field(default_factory=list)
	risk_score: int = 0

	def add(self, message: str, risk: int = 0) -> None:
		self.messages.append(message)
		self.risk_score += risk

	@property
	def confidence(self) -> float:
		return risk_confidence(self.risk_score)


def risk_confidence(risk_score: int) -> float:
	if risk_score == 0:
		return BASE_CONFIDENCE
	return max(MIN_CONFIDENCE, BASE_CONFIDENCE - risk_score * CONFIDENCE_STEP)


def _assess_moisture(moisture: float, assessment: Assessment) -> None:
	if moisture < 30:
		assessment.add(
			"🚨 CRITICAL: Soil moisture critically low. Immediate irrigation required to prevent crop failure.",
			3,
		)
	elif moisture < 40:
		assessment.add(
			"⚠️ Soil moisture below optimal. Schedule irrigation within 2-4 hours to maintain crop health.",
			2,
		)
	elif moisture > 75:
		assessment.add(
			"⚠️ Excessive soil moisture detected. Risk of root rot. Reduce irrigation and improve drainage.",
			2,
		)
	elif moisture > 65:
		assessment.add("💧 Soil moisture is on the high side. Monitor and reduce irrigation frequency.")
	else:
		assessment.add("✅ Soil moisture levels are optimal for healthy crop growth.")


def _assess_temperature(temperature: float, assessment: Assessment) -> None:
	if temperature > 35:
		assessment.add(
			"🌡️ EXTREME HEAT: Temperatures exceed safe limits. Implement shade nets, increase irrigation "
			"frequency (2-3x daily), and consider heat-tolerant crop varieties.",
			3,
		)
	elif temperature > 30:
		assessment.add(
			"🌡️ High temperature conditions. Increase irrigation, apply mulch to retain moisture, "
			"and monitor for heat stress symptoms.",
			2,
		)
	elif temperature < 10:
		assessment.add(
			"❄️ FREEZING RISK: Low temperatures detected. Use row covers, greenhouse protection, "
			"or consider cold-tolerant varieties.",
			3,
		)
	elif temperature < 15:
		assessment.add("🌡️ Cool conditions. Consider mulching for heat retention and protect sensitive crops.", 1)
	elif temperature > 28:
		assessment.add("🌡️ Warm conditions. Ensure adequate irrigation and watch for early heat stress.")
	else:
		assessment.add("✅ Temperature is within the ideal range for most agricultural crops.")


def _assess_humidity(humidity: float, assessment: Assessment) -> None:
	if humidity > 85:
		assessment.add(
			"💨 VERY HIGH HUMIDITY: Extreme risk of fungal diseases. Ensure maximum ventilation, "
			"apply preventive fungicides, and reduce irrigation.",
			3,
		)
	elif humidity > 75:
		assessment.add(
			"💨 High humidity detected. Monitor for fungal diseases, improve air circulation, "
			"and consider fungicide application.",
			2,
		)
	elif humidity < 30:
		assessment.add(
			"🌵 VERY LOW HUMIDITY: High evaporation risk. Increase irrigation frequency, "
			"consider misting systems, and use mulch to retain moisture.",
			2,
		)
	elif humidity < 40:
		assessment.add(
			"💨 Low humidity conditions. Slightly increase irrigation frequency to compensate "
			"for higher evaporation rates.",
			1,
		)
	else:
		assessment.add("✅ Humidity levels are suitable for optimal crop development.")


def _assess_combinations(moisture: float, temperature: float, humidity: float, assessment: Assessment) -> None:
	if moisture < 40 and temperature > 30:
		assessment.add(
			"🔥 CRITICAL COMBINATION: Dry soil + high temperature = extreme stress. "
			"Priority irrigation needed immediately (within 1 hour).",
			2,
		)
	if humidity > 80 and temperature > 25:
		assessment.add(
			"🌧️ DISEASE RISK: High humidity + warm temperature creates ideal conditions for fungal "
			"pathogens. Apply preventive fungicides and improve ventilation.",
			2,
		)
	if moisture > 70 and humidity > 75:
		assessment.add(
			"💧 WATERLOGGING RISK: High moisture + high humidity. Improve drainage immediately "
			"to prevent root asphyxiation.",
			2,
		)


def _overall(assessment: Assessment) -> str:
	if assessment.risk_score == 0:
		return "🌟 EXCELLENT CONDITIONS: All parameters are optimal. Maintain current irrigation and monitoring schedule."
	if assessment.risk_score <= 2:
		return "📊 MODERATE CONDITIONS: Minor adjustments recommended. Continue regular monitoring."
	if assessment.risk_score <= 4:
		return "⚠️ ATTENTION REQUIRED: Some conditions need immediate attention. Review irrigation and protection measures."
	return "🚨 URGENT ACTION NEEDED: Multiple critical conditions detected. Implement emergency measures immediately."


def assess_conditions(moisture: float, temperature: float, humidity: float) -> Assessment:
	"""Evaluate one reading against the threshold table."""
	require_finite(moisture=moisture, temperature=temperature, humidity=humidity)
	assessment = Assessment()
	_assess_moisture(moisture, assessment)
	_assess_temperature(temperature, assessment)
	_assess_humidity(humidity, assessment)
	_assess_combinations(moisture, temperature, humidity, assessment)
	assessment.messages.append(_overall(assessment))
	return assessment
