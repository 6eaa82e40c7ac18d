"""GrantProgram - a hibah funding pool with an application window."""

from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class GrantProgram(BaseModel):
    """Grant program record (table `master_hibah`).

    `allocated_budget` is the ledger's running sum of approved amounts of
    accepted proposals.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "nama_hibah": "Hibah Penelitian Internal 2024",
                "jenis": "Penelitian",
                "tahun_anggaran": 2024,
                "anggaran_total": 1_000_000_000,
                "anggaran_per_proposal": 100_000_000,
                "anggaran_teralokasi": 0,
                "tanggal_buka": "2024-01-01",
                "tanggal_tutup": "2024-03-31",
                "is_active": True,
            }
        },
    )

    id: Optional[str] = Field(None, description="Primary key")
    name: str = Field(..., alias="nama_hibah", description="Program name")
    description: Optional[str] = Field(None, alias="deskripsi")
    category: str = Field(..., alias="jenis", description="Penelitian, Pengabdian, ...")
    budget_year: int = Field(..., alias="tahun_anggaran")

    # Financial (whole Rupiah)
    total_budget: int = Field(..., alias="anggaran_total")
    per_proposal_cap: Optional[int] = Field(
        None, alias="anggaran_per_proposal", description="None means unlimited"
    )
    allocated_budget: int = Field(default=0, alias="anggaran_teralokasi")

    # Window
    open_date: date = Field(..., alias="tanggal_buka")
    close_date: date = Field(..., alias="tanggal_tutup")
    is_active: bool = Field(default=True)

    requirements: Optional[str] = Field(None, alias="persyaratan")

    def to_row(self) -> dict:
        """Serialize to a `master_hibah` table row."""
        return self.model_dump(mode="json", by_alias=True, exclude={"id"})
