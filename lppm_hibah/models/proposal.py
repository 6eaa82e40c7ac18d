"""Proposal - a grant application submitted by a team against a hibah."""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ProposalStatus(str, Enum):
    """Lifecycle status. Values are the persisted wire strings."""

    DRAFT = "draft"
    SUBMITTED = "submitted"
    REVIEW = "review"
    REVISION = "revision"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    COMPLETED = "completed"


# Statuses in which approved_amount must be set
FUNDED_STATUSES = frozenset({ProposalStatus.ACCEPTED, ProposalStatus.COMPLETED})


class Proposal(BaseModel):
    """Grant application record (table `proposal`).

    Attribute names are English; aliases are the persisted column names.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, description="Primary key (None until inserted)")
    title: str = Field(..., alias="judul", description="Research title")
    grant_program_id: str = Field(..., alias="hibah_id", description="Target grant program")
    team_id: str = Field(..., alias="tim_id", description="Owning team")
    lead_id: Optional[str] = Field(None, alias="ketua_id", description="Lead investigator (team's ketua)")

    # Narrative
    abstract: Optional[str] = Field(None, alias="abstrak")
    background: Optional[str] = Field(None, alias="latar_belakang")
    objectives: Optional[str] = Field(None, alias="tujuan")
    methodology: Optional[str] = Field(None, alias="metodologi")
    expected_outcomes: Optional[str] = Field(None, alias="luaran")

    # Financial (whole Rupiah)
    requested_amount: int = Field(..., alias="anggaran_diajukan", description="Requested budget")
    approved_amount: Optional[int] = Field(
        None, alias="anggaran_disetujui", description="Set only once accepted"
    )

    # Attachments
    document_url: Optional[str] = Field(None, alias="dokumen_proposal_url")
    drive_link: Optional[str] = Field(None, alias="link_drive")

    # Lifecycle
    status: ProposalStatus = Field(default=ProposalStatus.DRAFT, alias="status_proposal")
    evaluation_note: Optional[str] = Field(None, alias="catatan_evaluasi")
    submitted_at: Optional[datetime] = Field(None, alias="tanggal_submit")
    reviewed_at: Optional[datetime] = Field(None, alias="tanggal_review")
    reviewer_id: Optional[str] = Field(None)

    @property
    def has_document(self) -> bool:
        """True when a proposal document has been attached."""
        return bool(self.document_url and self.document_url.strip())

    def to_row(self) -> dict:
        """Serialize to a `proposal` table row."""
        return self.model_dump(mode="json", by_alias=True, exclude={"id"})
