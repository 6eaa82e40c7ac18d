"""Supabase database client for the hibah rule engine."""

import logging
import os
from typing import Any, Dict, List, Optional

from postgrest.exceptions import APIError
from supabase import Client, create_client
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
)

from ..models.disbursement_letter import DisbursementLetter
from ..models.grant_program import GrantProgram
from ..models.proposal import Proposal, ProposalStatus
from ..models.team import Team, TeamMember
from .store import ConcurrentUpdateError, DuplicateDocumentNumberError, NotFoundError

logger = logging.getLogger(__name__)

# Postgres unique_violation
UNIQUE_VIOLATION = "23505"

_TEAM_SELECT = "*, anggota_tim(user_id, peran, status, user:users(is_active))"


class SupabaseClient:
    """Client for the proposal, master_hibah, tim/anggota_tim and surat_pencairan tables."""

    def __init__(
        self,
        url: Optional[str] = None,
        key: Optional[str] = None,
    ) -> None:
        """Initialize Supabase client from explicit args or env vars.

        Args:
            url: Supabase project URL (falls back to SUPABASE_URL env var).
            key: Supabase anon/service key (falls back to SUPABASE_KEY env var).
        """
        self._url = url or os.environ["SUPABASE_URL"]
        self._key = key or os.environ["SUPABASE_KEY"]
        self._client: Client = create_client(self._url, self._key)

    # ------------------------------------------------------------------
    # Proposals
    # ------------------------------------------------------------------

    def load_proposal(self, proposal_id: str) -> Proposal:
        return Proposal(**self._single("proposal", proposal_id))

    def insert_proposal(self, proposal: Proposal) -> Proposal:
        response = self._client.table("proposal").insert(proposal.to_row()).execute()
        logger.info("Inserted proposal %s", proposal.title)
        return Proposal(**response.data[0])

    def save_proposal(self, proposal: Proposal, expected_status: ProposalStatus) -> Proposal:
        """Conditional update keyed on the status the caller read.

        Raises:
            ConcurrentUpdateError: If the stored status no longer matches.
        """
        response = (
            self._client.table("proposal")
            .update(proposal.to_row())
            .eq("id", proposal.id)
            .eq("status_proposal", ProposalStatus(expected_status).value)
            .execute()
        )
        if not response.data:
            raise ConcurrentUpdateError(
                f"Proposal {proposal.id} is no longer '{ProposalStatus(expected_status).value}'"
            )
        logger.info("Saved proposal %s status=%s", proposal.id, proposal.status.value)
        return Proposal(**response.data[0])

    # ------------------------------------------------------------------
    # Grant programs
    # ------------------------------------------------------------------

    def load_grant_program(self, program_id: str) -> GrantProgram:
        return GrantProgram(**self._single("master_hibah", program_id))

    def save_grant_program(self, program: GrantProgram) -> GrantProgram:
        """Insert or edit a hibah.

        Edits never write `anggaran_teralokasi`; only commit_acceptance and its
        compensation move the ledger.
        """
        table = self._client.table("master_hibah")
        if program.id is None:
            response = table.insert(program.to_row()).execute()
        else:
            row = program.to_row()
            row.pop("anggaran_teralokasi")
            response = table.update(row).eq("id", program.id).execute()
            if not response.data:
                raise NotFoundError(f"master_hibah {program.id} not found")
        logger.info("Saved hibah %s", program.name)
        return GrantProgram(**response.data[0])

    # ------------------------------------------------------------------
    # Teams
    # ------------------------------------------------------------------

    def load_team(self, team_id: str) -> Team:
        """Load a team with its members and each member's account status."""
        response = (
            self._client.table("tim")
            .select(_TEAM_SELECT)
            .eq("id", team_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            raise NotFoundError(f"tim {team_id} not found")
        row = dict(response.data[0])
        members = []
        for member in row.pop("anggota_tim", None) or []:
            user = member.get("user") or {}
            members.append(
                TeamMember(
                    user_id=member["user_id"],
                    peran=member.get("peran") or "Anggota",
                    status=member["status"],
                    user_active=user.get("is_active", True),
                )
            )
        return Team(**row, anggota_tim=members)

    # ------------------------------------------------------------------
    # Disbursement letters
    # ------------------------------------------------------------------

    def count_disbursement_letters_issued_in_year(self, year: int) -> int:
        """Count letters whose tanggal_surat falls in `year`."""
        response = (
            self._client.table("surat_pencairan")
            .select("id", count="exact")
            .gte("tanggal_surat", f"{year:04d}-01-01")
            .lte("tanggal_surat", f"{year:04d}-12-31")
            .execute()
        )
        return response.count or 0

    def list_disbursement_letters(self, proposal_id: str) -> List[DisbursementLetter]:
        response = (
            self._client.table("surat_pencairan")
            .select("*")
            .eq("proposal_id", proposal_id)
            .order("tanggal_surat")
            .execute()
        )
        return [DisbursementLetter(**row) for row in response.data]

    def insert_disbursement_letter(self, letter: DisbursementLetter) -> DisbursementLetter:
        """Insert a letter; the unique nomor_surat constraint serializes numbering.

        Raises:
            DuplicateDocumentNumberError: If the number was taken concurrently.
        """
        try:
            response = self._client.table("surat_pencairan").insert(letter.to_row()).execute()
        except APIError as exc:
            if exc.code == UNIQUE_VIOLATION:
                raise DuplicateDocumentNumberError(letter.document_number) from exc
            raise
        logger.info("Inserted surat pencairan %s", letter.document_number)
        return DisbursementLetter(**response.data[0])

    # ------------------------------------------------------------------
    # Acceptance (status + ledger)
    # ------------------------------------------------------------------

    def commit_acceptance(
        self,
        proposal: Proposal,
        program: GrantProgram,
        expected_status: ProposalStatus,
        expected_allocated: int,
    ) -> None:
        """Persist an accepted proposal together with its budget allocation.

        PostgREST has no multi-statement transactions, so both writes are
        conditional: the ledger bump is keyed on the allocated value read,
        the proposal update on the status read. If the proposal write loses,
        the allocation is released again before raising.

        Raises:
            ConcurrentUpdateError: If either row changed since it was read.
        """
        amount = program.allocated_budget - expected_allocated
        ledger = (
            self._client.table("master_hibah")
            .update({"anggaran_teralokasi": program.allocated_budget})
            .eq("id", program.id)
            .eq("anggaran_teralokasi", expected_allocated)
            .execute()
        )
        if not ledger.data:
            raise ConcurrentUpdateError(f"Ledger of hibah {program.id} changed concurrently")

        try:
            saved = (
                self._client.table("proposal")
                .update(proposal.to_row())
                .eq("id", proposal.id)
                .eq("status_proposal", ProposalStatus(expected_status).value)
                .execute()
            )
        except APIError:
            self._release_allocation(program.id, amount)
            raise
        if not saved.data:
            self._release_allocation(program.id, amount)
            raise ConcurrentUpdateError(
                f"Proposal {proposal.id} is no longer '{ProposalStatus(expected_status).value}'"
            )
        logger.info(
            "Committed acceptance proposal=%s hibah=%s amount=%d", proposal.id, program.id, amount
        )

    @retry(
        stop=stop_after_attempt(5),
        retry=retry_if_exception_type(ConcurrentUpdateError),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    def _release_allocation(self, program_id: str, amount: int) -> None:
        """Compensating write: subtract `amount` from the hibah's allocated budget."""
        current = self._single("master_hibah", program_id)["anggaran_teralokasi"]
        response = (
            self._client.table("master_hibah")
            .update({"anggaran_teralokasi": current - amount})
            .eq("id", program_id)
            .eq("anggaran_teralokasi", current)
            .execute()
        )
        if not response.data:
            raise ConcurrentUpdateError(f"Ledger of hibah {program_id} changed during release")
        logger.warning("Released allocation hibah=%s amount=%d", program_id, amount)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _single(self, table: str, row_id: str) -> Dict[str, Any]:
        response = self._client.table(table).select("*").eq("id", row_id).limit(1).execute()
        if not response.data:
            raise NotFoundError(f"{table} {row_id} not found")
        return response.data[0]
