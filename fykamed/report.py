"""The daily text report and the per-doctor patient listing."""

from __future__ import annotations

import io
import re
from datetime import date
from pathlib import Path

from fykamed.storage import DOCTOR_HEADER, Registry, State, extract_doctor_id

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _fields(line: str) -> list[str]:
    return [piece for piece in line.rstrip("\r\n").split(",") if piece]


def _to_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def format_patient_card(line: str) -> str:
    """Return a boxed rendering of a patient line."""
    fields = _fields(line)
    head = (fields + [""] * 5)[:5]
    state = ",".join(fields[5:]) or "N/A"
    labels = ("ID       ", "Nome     ", "CPF      ", "Idade    ", "ID Méd.  ", "Estado   ")
    parts = ["┌──────────────────────────────────────────────┐\n"]
    for label, value in zip(labels, [*head, state]):
        parts.append(f"│ {label}: {value:<34} │\n")
    parts.append("└──────────────────────────────────────────────┘\n\n")
    return "".join(parts)


def write_doctor_patients(registry: Registry, doctor_id: int, out) -> bool:
    """Write the cards of the doctor's patients to ``out``; return whether any exist."""
    out.write(f"\n📋 Pacientes do médico com ID {doctor_id}:\n\n")
    found = False
    for line in registry.patient_lines()[1:]:
        if extract_doctor_id(line) == doctor_id:
            out.write(format_patient_card(line))
            found = True
    if not found:
        out.write("⚠️  Nenhum paciente foi encontrado para esse médico.\n")
    return found


def report_filename(day: date) -> str:
    return f"relatorio_{day.day}-{day.month}-{day.year}.txt"


def build_report(registry: Registry) -> str:
    """Return the full text of the general report."""
    out = io.StringIO()
    count = registry.count_patients
    out.write("Relatório Geral do Sistema FYKA Med\n")
    out.write(f"\n- Total de Pacientes Cadastrados no Sistema: {count()}\n")
    out.write(f"  - Internados: {count(State.SEVERE)}\n")
    out.write(f"  - Em Alta: {count(State.DISCHARGED)}\n")
    out.write(f"  - Atendidos: {count(State.MODERATE) + count(State.MILD)}\n")
    out.write("\n- Pacientes por Estado: \n")
    out.write(f"  - Leve: {count(State.MILD)}\n")
    out.write(f"  - Moderado: {count(State.MODERATE)}\n")
    out.write(f"  - Grave (INTERNAÇÃO): {count(State.SEVERE)}\n")
    out.write(f"\n- Total de Médicos Cadastrados no Sistema: {registry.count_doctors()}\n")
    out.write("\n- Lista Completa de Médicos: ")
    out.write("\n----------------------------------------\n\n")
    for line in registry.doctor_lines():
        if line == DOCTOR_HEADER or not line.strip():
            continue
        doctor_id, name, crm, on_duty = (_fields(line) + [""] * 4)[:4]
        out.write(f"  ID {doctor_id},\n  Nome: {name},\n  CRM: {crm},\n  Plantão: {on_duty}\n")
        write_doctor_patients(registry, _to_int(doctor_id), out)
        out.write("  -----\n\n")
    return out.getvalue()


def generate_report(registry: Registry, directory=None, day=None) -> Path:
    """Write the report for ``day`` (default today) and return its path."""
    target = Path(directory) if directory is not None else registry.directory
    path = target / report_filename(day or date.today())
    path.write_text(build_report(registry), encoding="utf-8")
    return path