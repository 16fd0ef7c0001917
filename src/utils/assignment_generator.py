# ===== src/utils/assignment_generator.py =====
"""Generator pasangan penilai -> dinilai untuk sebuah event.

Aturan PERIODIC (per role penilai):

* BPI     : menilai semua peserta lain di periode.
* KADIV   : menilai semua BPI + ANGGOTA di divisinya.
* ANGGOTA : menilai semua BPI + KADIV divisinya + ANGGOTA lain di divisinya.
* ADMIN   : diperlakukan seperti BPI, atau dikeluarkan dari kedua sisi jika
            ``admin_as_bpi=False``.

User tanpa divisi tidak pernah cocok dengan target berbasis divisi, jadi
KADIV/ANGGOTA tanpa divisi hanya menilai BPI.

Aturan PROKER: graf berarah lengkap antar panitia tanpa self-loop, tanpa
melihat role.

Semua fungsi di sini murni (tanpa database); service yang memuat roster dan
menyimpan hasilnya.
"""

from typing import Iterable, List, NamedTuple, Optional, Sequence

from src.models.enums import EventType, UserRole


class RosterEntry(NamedTuple):
    """Data minimal user yang dibutuhkan untuk pairing."""
    id: str
    role: UserRole
    division_id: Optional[str] = None


class AssignmentPair(NamedTuple):
    evaluator_id: str
    evaluatee_id: str


def _same_division(a: RosterEntry, b: RosterEntry) -> bool:
    return a.division_id is not None and a.division_id == b.division_id


def _unique(pairs: Iterable[AssignmentPair]) -> List[AssignmentPair]:
    """Buang duplikat dan self-pair, urutan pertama dipertahankan."""
    return [pair for pair in dict.fromkeys(pairs) if pair.evaluator_id != pair.evaluatee_id]


def generate_periodic_pairs(
    roster: Sequence[RosterEntry],
    admin_as_bpi: bool = True
) -> List[AssignmentPair]:
    """Hitung semua pasangan untuk event PERIODIC dari roster user aktif periode."""
    roster = [entry._replace(role=UserRole(entry.role)) for entry in roster]

    hub_roles = {UserRole.BPI, UserRole.ADMIN} if admin_as_bpi else {UserRole.BPI}
    hubs = [u for u in roster if u.role in hub_roles]
    kadiv = [u for u in roster if u.role == UserRole.KADIV]
    anggota = [u for u in roster if u.role == UserRole.ANGGOTA]
    participants = [u for u in roster if u.role in hub_roles or u.role in (UserRole.KADIV, UserRole.ANGGOTA)]

    pairs: List[AssignmentPair] = []
    for evaluator in roster:
        role = evaluator.role

        if role in hub_roles:
            targets = participants
        elif role == UserRole.ADMIN:
            # admin_as_bpi=False: admin tidak menilai dan tidak dinilai
            continue
        elif role == UserRole.KADIV:
            targets = hubs + [a for a in anggota if _same_division(a, evaluator)]
        elif role == UserRole.ANGGOTA:
            targets = (
                hubs
                + [k for k in kadiv if _same_division(k, evaluator)]
                + [a for a in anggota if _same_division(a, evaluator)]
            )
        else:
            raise ValueError(f"Role tidak dikenal: {role}")

        pairs.extend(AssignmentPair(evaluator.id, target.id) for target in targets)

    return _unique(pairs)


def generate_proker_pairs(members: Sequence[RosterEntry]) -> List[AssignmentPair]:
    """Hitung semua pasangan untuk event PROKER: setiap panitia menilai panitia lain."""
    member_ids = list(dict.fromkeys(m.id for m in members))
    return [
        AssignmentPair(evaluator_id, evaluatee_id)
        for evaluator_id in member_ids
        for evaluatee_id in member_ids
        if evaluator_id != evaluatee_id
    ]


def build_pairs(
    event_type: EventType,
    period_roster: Sequence[RosterEntry] = (),
    committee_roster: Sequence[RosterEntry] = (),
    admin_as_bpi: bool = True
) -> List[AssignmentPair]:
    """Pilih aturan sesuai tipe event."""
    event_type = EventType(event_type)
    if event_type == EventType.PERIODIC:
        return generate_periodic_pairs(period_roster, admin_as_bpi=admin_as_bpi)
    if event_type == EventType.PROKER:
        return generate_proker_pairs(committee_roster)
    raise ValueError(f"Tipe event tidak dikenal: {event_type}")
