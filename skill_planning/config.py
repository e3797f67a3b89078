"""Engine calibration settings.

Every threshold used by the analyzers lives here as a named constant. The
values can be overridden per call (``settings=``) or from SKILL_PLANNING_*
environment variables via :func:`load_settings`.
"""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, model_validator

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
# Partial credit for a required skill the team lacks but whose category it
# covers. Kept below 0.4 so one adjacent gap out of three stays "good".
CATEGORY_MATCH_CREDIT = 0.25

EXCELLENT_THRESHOLD = 0.8
GOOD_THRESHOLD = 0.6
FAIR_THRESHOLD = 0.3

WELL_COVERED_THRESHOLD = 3
LOW_COVERAGE_THRESHOLD = 1
CATEGORY_ATTENTION_PERCENTAGE = 60.0

NAME_MATCH_THRESHOLD = 0.8
AUTO_MATCH_CONFIDENCE = 0.95

_ENV_PREFIX = "SKILL_PLANNING_"


class EngineSettings(BaseModel):
    """Calibration constants for scoring, coverage and name matching."""

    category_match_credit: float = Field(default=CATEGORY_MATCH_CREDIT, gt=0.0, lt=1.0)
    excellent_threshold: float = Field(default=EXCELLENT_THRESHOLD, gt=0.0, le=1.0)
    good_threshold: float = Field(default=GOOD_THRESHOLD, gt=0.0, le=1.0)
    fair_threshold: float = Field(default=FAIR_THRESHOLD, gt=0.0, le=1.0)
    well_covered_threshold: int = Field(default=WELL_COVERED_THRESHOLD, ge=1)
    low_coverage_threshold: int = Field(default=LOW_COVERAGE_THRESHOLD, ge=1)
    category_attention_percentage: float = Field(
        default=CATEGORY_ATTENTION_PERCENTAGE, ge=0.0, le=100.0
    )
    name_match_threshold: float = Field(default=NAME_MATCH_THRESHOLD, gt=0.0, le=1.0)
    auto_match_confidence: float = Field(default=AUTO_MATCH_CONFIDENCE, gt=0.0, le=1.0)

    @model_validator(mode="after")
    def validate_threshold_order(self) -> EngineSettings:
        if not self.fair_threshold < self.good_threshold < self.excellent_threshold:
            raise ValueError(
                "Thresholds must satisfy fair < good < excellent, got "
                f"{self.fair_threshold} / {self.good_threshold} / {self.excellent_threshold}"
            )
        return self


DEFAULT_SETTINGS = EngineSettings()


def load_settings(dotenv: bool = True) -> EngineSettings:
    """Build settings from SKILL_PLANNING_* environment variables.

    Unset variables keep their defaults, e.g. ``SKILL_PLANNING_CATEGORY_MATCH_CREDIT=0.3``.

    Args:
        dotenv: Load a ``.env`` file from the working directory first.

    Raises:
        ValueError: If a variable holds an invalid value.
    """
    if dotenv:
        load_dotenv()

    overrides: dict[str, str] = {}
    for field_name in EngineSettings.model_fields:
        raw = os.getenv(f"{_ENV_PREFIX}{field_name.upper()}", "")
        if raw:
            overrides[field_name] = raw

    try:
        settings = EngineSettings(**overrides)
    except ValidationError as e:
        names = ", ".join(f"{_ENV_PREFIX}{k.upper()}" for k in overrides)
        raise ValueError(f"Invalid skill planning settings ({names}): {e}") from e

    logger.info(
        "Skill planning settings: category_credit=%s thresholds=%s/%s/%s overrides=%s",
        settings.category_match_credit,
        settings.fair_threshold,
        settings.good_threshold,
        settings.excellent_threshold,
        sorted(overrides) or "(none)",
    )
    return settings
