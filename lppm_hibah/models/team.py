"""Team - research team (tim) and its invited members (anggota_tim)."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class MemberStatus(str, Enum):
    """Invitation status of a team member."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


LEAD_ROLE = "Ketua"
LECTURER_ASSISTANT_ROLE = "Asisten Dosen"
RESEARCH_ASSISTANT_ROLE = "Asisten Peneliti"


class TeamMember(BaseModel):
    """One row of `anggota_tim`, flattened with the user's active flag."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str
    role: str = Field(default="Anggota", alias="peran")
    status: MemberStatus = Field(default=MemberStatus.PENDING)
    user_active: bool = Field(default=True, description="users.is_active of the member's account")

    @property
    def counts_toward_size(self) -> bool:
        """Accepted invitation on an active account."""
        return self.status == MemberStatus.ACCEPTED and self.user_active


class Team(BaseModel):
    """Team record (table `tim`) with its members."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    name: str = Field(..., alias="nama_tim")
    description: Optional[str] = Field(None, alias="deskripsi")
    lead_id: str = Field(..., alias="ketua_id", description="dosen.id of the ketua")
    members: list[TeamMember] = Field(default_factory=list, alias="anggota_tim")
    is_archived: bool = False

    @property
    def accepted_members(self) -> list[TeamMember]:
        return [m for m in self.members if m.counts_toward_size]
