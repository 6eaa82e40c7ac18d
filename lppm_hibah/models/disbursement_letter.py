"""DisbursementLetter - surat pencairan authorizing fund release."""

from datetime import date
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class DisbursementLetter(BaseModel):
    """Disbursement letter record (table `surat_pencairan`)."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    proposal_id: str = Field(..., description="Accepted proposal being funded")
    document_number: str = Field(..., alias="nomor_surat", description="SP/NNNN/LPPM/YYYY")
    issue_date: date = Field(..., alias="tanggal_surat")
    disbursed_amount: int = Field(..., alias="jumlah_dana", description="Whole Rupiah")
    note: Optional[str] = Field(None, alias="keterangan")
    document_url: Optional[str] = Field(None, alias="dokumen_url")
    created_by: Optional[str] = None

    def to_row(self) -> dict:
        """Serialize to a `surat_pencairan` table row."""
        return self.model_dump(mode="json", by_alias=True, exclude={"id"})
