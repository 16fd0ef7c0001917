"""Enums untuk database models - MATCH DATABASE UPPERCASE."""

from enum import Enum


class UserRole(str, Enum):
    """User role enum yang match dengan database UPPERCASE values."""
    ADMIN = "ADMIN"       # Pengelola sistem
    BPI = "BPI"           # Badan Pengurus Inti
    KADIV = "KADIV"       # Kepala divisi
    ANGGOTA = "ANGGOTA"   # Anggota divisi

    @classmethod
    def management_roles(cls):
        """Roles yang boleh mengelola master data dan melihat hasil."""
        return [cls.ADMIN.value, cls.BPI.value, cls.KADIV.value]


class EventType(str, Enum):
    """Jenis event penilaian."""
    PERIODIC = "PERIODIC"   # Penilaian berkala satu periode
    PROKER = "PROKER"       # Penilaian panitia program kerja


class IndicatorCategory(str, Enum):
    """Kategori indikator penilaian."""
    HARD = "hard"
    SOFT = "soft"
    OTHER = "other"
