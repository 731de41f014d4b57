"""Configuration models for claim validation.

Values live in ``configs/config.json`` under the ``validation`` key. The
workflow receives them through a ``ResourceConfig``; synchronous callers use
``load_validation_config``.
"""

import json
from pathlib import Path

from pydantic import BaseModel, Field

from .schemas.common import ValidationCheck

CONFIG_FILE = Path(__file__).resolve().parents[2] / "configs" / "config.json"
CONFIG_SECTION = "validation"


class TimelyFilingSettings(BaseModel):
    """Filing window used when the payer is unknown, and the near-expiry warning."""

    default_days: int = 90
    warning_threshold_days: int = 30


class RegistrySettings(BaseModel):
    """Provider registry lookup settings."""

    enabled: bool = True
    timeout_seconds: float = 5.0


class ValidationSettings(BaseModel):
    timely_filing: TimelyFilingSettings = TimelyFilingSettings()
    registry: RegistrySettings = RegistrySettings()


class ValidationConfig(BaseModel):
    """Validation settings plus the checks run when the caller names none."""

    settings: ValidationSettings = ValidationSettings()
    checks: list[ValidationCheck] = Field(default_factory=lambda: list(ValidationCheck))


def load_validation_config(path: Path | str | None = None) -> ValidationConfig:
    """Load the validation section of the config file, or defaults if absent."""
    config_path = Path(path) if path is not None else CONFIG_FILE
    if not config_path.exists():
        return ValidationConfig()
    data = json.loads(config_path.read_text())
    return ValidationConfig.model_validate(data.get(CONFIG_SECTION, {}))
