"""Review criterion weights, optionally loaded from a JSON or YAML file."""

import json
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

SUM_TOLERANCE = 1e-3

_LOADERS = {
    ".json": json.loads,
    ".yaml": yaml.safe_load,
    ".yml": yaml.safe_load,
}


class ReviewWeights(BaseModel):
    """Share of each criterion in the weighted score; the four must sum to 1.0."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    originality: float = Field(0.25, ge=0, le=1)
    methodology: float = Field(0.30, ge=0, le=1)
    feasibility: float = Field(0.25, ge=0, le=1)
    impact: float = Field(0.20, ge=0, le=1)
    version: str = Field("1.0", description="Reported with every verdict")

    @model_validator(mode="after")
    def _sum_to_one(self) -> "ReviewWeights":
        total = self.originality + self.methodology + self.feasibility + self.impact
        if abs(total - 1.0) > SUM_TOLERANCE:
            raise ValueError(f"Bobot penilaian harus berjumlah 1.0, saat ini {total:.3f}")
        return self


DEFAULT_WEIGHTS = ReviewWeights()


def load_weights(filepath: Optional[str] = None) -> ReviewWeights:
    """Weights from `filepath` (.json/.yaml/.yml), or the defaults when unset.

    Raises:
        FileNotFoundError: If filepath is given but missing.
        ValueError: On an unsupported extension or invalid weights.
    """
    if not filepath:
        return DEFAULT_WEIGHTS

    path = Path(filepath)
    loader = _LOADERS.get(path.suffix.lower())
    if loader is None:
        raise ValueError(f"Unsupported weights format {path.suffix!r}; use .json, .yaml or .yml")
    if not path.is_file():
        raise FileNotFoundError(f"Weights file not found: {filepath}")

    return ReviewWeights.model_validate(loader(path.read_text()) or {})
