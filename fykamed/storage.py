"""CSV-backed storage of doctors and patients."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path

DOCTORS_FILE = "medicos.csv"
PATIENTS_FILE = "pacientes.csv"
DOCTOR_HEADER = "id,nome,crm,plantao"
PATIENT_HEADER = "id,nome,cpf,idade,idmed,estado"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class State(IntEnum):
    """Clinical state of a patient as stored in the CSV file."""

    DISCHARGED = 0
    MILD = 1
    MODERATE = 2
    SEVERE = 3


@dataclass
class Doctor:
    id: int
    name: str
    crm: str
    on_duty: bool

    def to_row(self) -> str:
        """Return the CSV line (without newline) for this doctor."""
        duty = "true" if self.on_duty else "false"
        return f"{self.id},{self.name},{self.crm},{duty}"


@dataclass
class Patient:
    id: int
    name: str
    cpf: str
    age: int
    doctor_id: int
    state: State

    def to_row(self) -> str:
        """Return the CSV line (without newline) for this patient."""
        return (
            f"{self.id},{self.name},{self.cpf},{self.age},"
            f"{self.doctor_id},{int(self.state)}"
        )


def _leading_int(text: str, default: int = 0) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else default


def _fields(line: str) -> list[str]:
    """Split a record on commas, dropping empty pieces as the file format does."""
    return [piece for piece in line.rstrip("\r\n").split(",") if piece]


def _read_lines(path: Path) -> list[str]:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return []
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line.rstrip("\r") for line in lines]


def extract_state(line: str) -> int | None:
    """Return the state column of a patient line, or None if it has none."""
    fields = _fields(line)
    if len(fields) < 6:
        return None
    return _leading_int(fields[5])


def extract_doctor_id(line: str) -> int:
    """Return the responsible doctor's id of a patient line, or -1."""
    fields = _fields(line)
    if len(fields) < 5:
        return -1
    return _leading_int(fields[4])


def last_id(path) -> int:
    """Return the id that starts the last line of the file, or 0."""
    lines = _read_lines(Path(path))
    return _leading_int(lines[-1]) if lines else 0


def count_records(path, state=None) -> int:
    """Count the records after the header line, optionally only those in ``state``."""
    records = _read_lines(Path(path))[1:]
    if state is None:
        return len(records)
    target = str(int(state))
    count = 0
    for line in records:
        fields = _fields(line)
        if len(fields) < 6:
            continue
        if ",".join(fields[5:]) == target:
            count += 1
    return count


@dataclass
class Registry:
    """The pair of CSV files holding doctors and patients."""

    directory: Path = field(default_factory=lambda: Path("."))

    def __post_init__(self) -> None:
        self.directory = Path(self.directory)

    @property
    def doctors_path(self) -> Path:
        return self.directory / DOCTORS_FILE

    @property
    def patients_path(self) -> Path:
        return self.directory / PATIENTS_FILE

    def ensure_files(self) -> None:
        """Create missing data files, each starting with its header line."""
        self.directory.mkdir(parents=True, exist_ok=True)
        for path, header in (
            (self.doctors_path, DOCTOR_HEADER),
            (self.patients_path, PATIENT_HEADER),
        ):
            if not path.exists():
                path.write_text(header + "\n", encoding="utf-8")

    def next_doctor_id(self) -> int:
        return last_id(self.doctors_path) + 1

    def next_patient_id(self) -> int:
        return last_id(self.patients_path) + 1

    def doctor_exists(self, doctor_id) -> bool:
        wanted = str(doctor_id)
        for line in self.doctor_lines():
            if line == DOCTOR_HEADER:
                continue
            fields = _fields(line)
            if fields and fields[0] == wanted:
                return True
        return False

    def count_patients(self, state=None) -> int:
        return count_records(self.patients_path, state)

    def count_doctors(self) -> int:
        return count_records(self.doctors_path)

    def doctor_lines(self) -> list[str]:
        return _read_lines(self.doctors_path)

    def patient_lines(self) -> list[str]:
        return _read_lines(self.patients_path)

    def append_doctor(self, doctor: Doctor) -> None:
        self._append(self.doctors_path, doctor.to_row())

    def append_patient(self, patient: Patient) -> None:
        self._append(self.patients_path, patient.to_row())

    def replace_doctor_lines(self, lines) -> None:
        self._replace(self.doctors_path, lines)

    def replace_patient_lines(self, lines) -> None:
        self._replace(self.patients_path, lines)

    @staticmethod
    def _append(path: Path, row: str) -> None:
        with path.open("a", encoding="utf-8") as handle:
            handle.write(row + "\n")

    @staticmethod
    def _replace(path: Path, lines) -> None:
        temp = path.with_name(f"{path.stem}_temp{path.suffix}")
        with temp.open("w", encoding="utf-8") as handle:
            for line in lines:
                handle.write(line + "\n")
        os.replace(temp, path)