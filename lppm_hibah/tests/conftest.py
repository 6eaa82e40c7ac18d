"""Pytest configuration and fixtures."""

from datetime import date, datetime, timezone

import pytest

from lppm_hibah.models import (
    GrantProgram,
    MemberStatus,
    Proposal,
    ProposalStatus,
    Team,
    TeamMember,
)

FIXED_NOW = datetime(2025, 3, 10, 8, 30, tzinfo=timezone.utc)

ABSTRACT = (
    "Penelitian ini mengembangkan model prediksi banjir berbasis data curah hujan "
    "dan citra satelit untuk wilayah hilir sungai di Jawa Tengah."
)
BACKGROUND = (
    "Banjir tahunan di wilayah hilir menyebabkan kerugian ekonomi yang besar bagi "
    "masyarakat. Sistem peringatan dini yang ada masih mengandalkan pengamatan manual "
    "sehingga waktu tanggap sering terlambat. Pemodelan berbasis data dapat memperpanjang "
    "waktu peringatan secara signifikan."
)


@pytest.fixture
def fixed_clock():
    """Clock returning a fixed UTC instant."""
    return lambda: FIXED_NOW


@pytest.fixture
def make_team():
    """Factory: team whose first accepted member is the ketua."""

    def _make(accepted=5, pending=0, rejected=0, inactive=0, archived=False, team_id="tim-1"):
        members = []
        for i in range(accepted):
            members.append(
                TeamMember(
                    user_id=f"dosen-{i + 1}",
                    peran="Ketua" if i == 0 else "Anggota",
                    status=MemberStatus.ACCEPTED,
                )
            )
        for i in range(pending):
            members.append(TeamMember(user_id=f"pending-{i + 1}", status=MemberStatus.PENDING))
        for i in range(rejected):
            members.append(TeamMember(user_id=f"rejected-{i + 1}", status=MemberStatus.REJECTED))
        for i in range(inactive):
            members.append(
                TeamMember(
                    user_id=f"inactive-{i + 1}",
                    status=MemberStatus.ACCEPTED,
                    user_active=False,
                )
            )
        return Team(
            id=team_id,
            nama_tim="Tim Hidrologi",
            ketua_id="dosen-1",
            anggota_tim=members,
            is_archived=archived,
        )

    return _make


@pytest.fixture
def program() -> GrantProgram:
    return GrantProgram(
        id="hibah-1",
        nama_hibah="Hibah Penelitian Internal 2025",
        jenis="Penelitian",
        tahun_anggaran=2025,
        anggaran_total=1_000_000_000,
        anggaran_per_proposal=100_000_000,
        anggaran_teralokasi=0,
        tanggal_buka=date(2025, 1, 1),
        tanggal_tutup=date(2025, 6, 30),
        is_active=True,
    )


@pytest.fixture
def make_proposal():
    """Factory: complete, valid proposal in the given status."""

    def _make(status=ProposalStatus.DRAFT, **overrides):
        fields = dict(
            id="prop-1",
            judul="Model Prediksi Banjir Berbasis Data",
            hibah_id="hibah-1",
            tim_id="tim-1",
            ketua_id="dosen-1",
            abstrak=ABSTRACT,
            latar_belakang=BACKGROUND,
            tujuan="Membangun model prediksi banjir",
            metodologi="Random forest dengan validasi silang",
            luaran="Artikel jurnal dan prototipe sistem",
            anggaran_diajukan=75_000_000,
            dokumen_proposal_url="https://storage.example.ac.id/proposal/prop-1.pdf",
            status_proposal=status,
        )
        if status in (ProposalStatus.ACCEPTED, ProposalStatus.COMPLETED):
            fields["anggaran_disetujui"] = 75_000_000
        fields.update(overrides)
        return Proposal(**fields)

    return _make
