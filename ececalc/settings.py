"""
Validated configuration for the calculation engine.

Settings are plain pydantic models passed explicitly to the functions that
need them; nothing here reads the environment. ``DEFAULT_SETTINGS``
holds the standard tuning constants.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SolverSettings(BaseModel):
    """Brent solver tuning."""
    model_config = ConfigDict(frozen=True)

    tolerance: float = Field(1e-13, gt=0, description="Absolute |f(x)| / relative step tolerance")
    max_iterations: int = Field(256, ge=1, description="Iteration cap before giving up (NaN)")


class DividerPolicy(BaseModel):
    """
    Tie-break policy for voltage divider candidate search.

    Pairs drawing more than ``max_current`` from the source always lose.
    Among pairs with the same ratio error, the one whose current is closest
    to ``ideal_current`` wins.
    """
    model_config = ConfigDict(frozen=True)

    ideal_current: float = Field(1e-4, gt=0, description="Preferred divider current (A)")
    max_current: float = Field(1e-2, gt=0, description="Current ceiling (A)")


class TraceSolveSettings(BaseModel):
    """Search interval (mm) for backward PCB trace width/spacing solves."""
    model_config = ConfigDict(frozen=True)

    min_width: float = Field(0.01, gt=0, description="Smallest width tried (mm)")
    max_width: float = Field(100.0, gt=0, description="Largest width tried (mm)")

    @model_validator(mode='after')
    def _check_order(self):
        if self.min_width >= self.max_width:
            raise ValueError('min_width must be below max_width')
        return self


class EngineSettings(BaseModel):
    """All engine settings in one place."""
    model_config = ConfigDict(frozen=True)

    solver: SolverSettings = SolverSettings()
    divider: DividerPolicy = DividerPolicy()
    trace: TraceSolveSettings = TraceSolveSettings()
    default_sigfigs: int = Field(3, ge=1, le=14, description="Display precision for new values")


DEFAULT_SETTINGS = EngineSettings()


def load_settings(data: Optional[Dict[str, Any]] = None) -> EngineSettings:
    """
    Build settings from a plain mapping, filling in defaults.

    Raises:
        pydantic.ValidationError (a ValueError) on out-of-range entries.
    """
    if not data:
        return DEFAULT_SETTINGS
    return EngineSettings.model_validate(data)
