"""Hardcoded authoring defaults — configuration only."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_COLOR = "#3b82f6"

PRESET_COLORS: list[str] = [
    "#3b82f6",
    "#10b981",
    "#6366f1",
    "#f59e0b",
    "#ef4444",
    "#ec4899",
    "#8b5cf6",
    "#06b6d4",
]


@dataclass(frozen=True, slots=True)
class OnboardingPreset:
    language: str
    default_area: str


ONBOARDING_PRESETS: dict[str, OnboardingPreset] = {
    "pt": OnboardingPreset(language="pt", default_area="Saúde"),
    "en": OnboardingPreset(language="en", default_area="Health"),
    "es": OnboardingPreset(language="es", default_area="Salud"),
}


def default_area(language: str) -> str:
    """Area name used when the first goal is submitted without one."""
    preset = ONBOARDING_PRESETS.get(language)
    return preset.default_area if preset else ONBOARDING_PRESETS["en"].default_area
