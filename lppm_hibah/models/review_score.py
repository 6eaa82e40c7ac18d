"""ReviewScore - ephemeral multi-criterion review input and its verdict."""

from pydantic import BaseModel, ConfigDict, Field


class ReviewScore(BaseModel):
    """Four criterion scores, each 0-100. Never persisted by the core."""

    model_config = ConfigDict(populate_by_name=True)

    originality: float = Field(..., ge=0, le=100, alias="originalitas")
    methodology: float = Field(..., ge=0, le=100, alias="metodologi")
    feasibility: float = Field(..., ge=0, le=100, alias="kelayakan")
    impact: float = Field(..., ge=0, le=100, alias="dampak")


class ReviewVerdict(BaseModel):
    """Advisory outcome handed to the human reviewer."""

    score: float = Field(..., description="Weighted score, 2 decimals")
    category: str = Field(..., description="Sangat Baik .. Sangat Kurang")
    eligible_for_funding: bool
    min_score: float
    weights_version: str
