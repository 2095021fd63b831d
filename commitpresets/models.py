"""Shared models for commit-presets."""
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PresetName(str, Enum):
    ANGULAR = "angular"
    ATOM = "atom"
    ESLINT = "eslint"
    EMBER = "ember"
    JQUERY = "jquery"


class Severity(str, Enum):
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class DiagnosticMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    severity: Severity = Severity.INFO


class ValidationOptions(BaseModel):
    preset: str = Field(
        default=PresetName.ANGULAR.value,
        description="Name of the preset to validate against"
    )
    quiet: Optional[bool] = Field(
        default=None,
        description="Suppress the 'validation ignored' notice (None reads the SILENT toggle)"
    )
