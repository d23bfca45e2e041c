# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Schedule validation rules. Every rule is checked; all failures are returned.
"""

import re
from typing import Optional

from app.models.domain import VALID_CLASSES, VALID_DAYS

TIME_PATTERN = re.compile(r"([01]?[0-9]|2[0-3]):([0-5][0-9])")


def parse_time(value: Optional[str]) -> Optional[int]:
    """Minutes since midnight for an ``HH:MM`` string, or None if malformed."""
    if not value:
        return None
    match = TIME_PATTERN.fullmatch(value)
    if match is None:
        return None
    return int(match.group(1)) * 60 + int(match.group(2))


def validate_schedule(
    class_: Optional[str],
    day: Optional[str],
    subject: Optional[str],
    teacher: Optional[str],
    start_time: Optional[str],
    end_time: Optional[str],
) -> list[str]:
    """Return the list of violated rules, empty when the entry is valid."""
    errors: list[str] = []

    if class_ not in VALID_CLASSES:
        errors.append("Kelas harus diisi dan harus 'XI A' atau 'XI B'")

    if day not in VALID_DAYS:
        errors.append("Hari harus diisi dan harus Senin, Selasa, Rabu, Kamis, atau Jumat")

    if not subject or not subject.strip():
        errors.append("Mata pelajaran wajib diisi")

    if not teacher or not teacher.strip():
        errors.append("Nama guru wajib diisi")

    start = parse_time(start_time)
    if start is None:
        errors.append("Waktu mulai harus diisi dengan format HH:mm")

    end = parse_time(end_time)
    if end is None:
        errors.append("Waktu selesai harus diisi dengan format HH:mm")

    if start is not None and end is not None and end <= start:
        errors.append("Waktu selesai harus setelah waktu mulai")

    return errors
