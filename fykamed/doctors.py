"""Registration, lookup, update and removal of doctors."""

from __future__ import annotations

import io
import re

from fykamed.report import write_doctor_patients
from fykamed.storage import DOCTOR_HEADER, PATIENT_HEADER, Doctor, Registry

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_RULE = "----------------------------------------------------------------------\n"
_LONG_RULE = "-----------------------------------------------------------------------\n\n"
_ANOTHER_ID = "Deseja procurar por outro ID? (S / N)"
_DUTY_ERROR = "Opção inválida. Digite (S -> SIM ou N -> NÃO)."


class DoctorHasPatients(Exception):
    """Raised when a doctor who is still responsible for patients is removed."""

    def __init__(self, doctor_id, patient_lines):
        super().__init__(f"doctor {doctor_id} still has {len(patient_lines)} patient(s)")
        self.doctor_id = doctor_id
        self.patient_lines = list(patient_lines)


def _fields(line: str) -> list[str]:
    return [piece for piece in line.rstrip("\r\n").split(",") if piece]


def _to_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _doctor_records(registry: Registry):
    """Yield (line, fields) for every doctor record, skipping the header."""
    for line in registry.doctor_lines():
        if line == DOCTOR_HEADER:
            continue
        fields = _fields(line)
        if fields:
            yield line, fields


def _parse_doctor(fields: list[str]) -> Doctor:
    doctor_id, name, crm, duty = (fields + [""] * 4)[:4]
    return Doctor(_to_int(doctor_id), name, crm, duty.strip() == "true")


def _describe(fields: list[str]) -> str:
    doctor_id, name, crm, duty = (fields + [""] * 4)[:4]
    return f"[{doctor_id}]\n  Nome: {name}\n  CRM: {crm}\n  Plantão: {duty}\n"


def find_doctor(registry: Registry, doctor_id) -> Doctor | None:
    """Return the doctor whose id column equals ``doctor_id``, or None."""
    wanted = str(doctor_id)
    for _, fields in _doctor_records(registry):
        if fields[0] == wanted:
            return _parse_doctor(fields)
    return None


def patients_of_doctor(registry: Registry, doctor_id) -> list[str]:
    """Return the patient lines whose responsible doctor is ``doctor_id``."""
    wanted = str(doctor_id)
    result = []
    for line in registry.patient_lines():
        if line == PATIENT_HEADER:
            continue
        fields = _fields(line)
        if len(fields) >= 5 and fields[4] == wanted:
            result.append(line)
    return result


def rewrite_doctor(registry: Registry, doctor_id, name, on_duty) -> bool:
    """Replace name and duty of the doctor ``doctor_id``; return whether it was found."""
    wanted = str(doctor_id)
    found = False
    lines = []
    for line in registry.doctor_lines():
        fields = _fields(line)
        if line != DOCTOR_HEADER and fields and fields[0] == wanted:
            current = _parse_doctor(fields)
            lines.append(Doctor(current.id, name, current.crm, bool(on_duty)).to_row())
            found = True
        else:
            lines.append(line)
    if found:
        registry.replace_doctor_lines(lines)
    return found


def remove_doctor(registry: Registry, doctor_id) -> bool:
    """Delete the doctor ``doctor_id``; return whether it was found.

    Raises DoctorHasPatients if any patient still names this doctor.
    """
    attached = patients_of_doctor(registry, doctor_id)
    if attached:
        raise DoctorHasPatients(doctor_id, attached)
    wanted = str(doctor_id)
    found = False
    kept = []
    for line in registry.doctor_lines():
        fields = _fields(line)
        if fields and fields[0] == wanted:
            found = True
        elif line.strip():
            kept.append(line)
    registry.replace_doctor_lines(kept)
    return found


def register_doctors(registry: Registry, console) -> None:
    """Ask for doctors one after another and append them to the registry."""
    console.clear()
    console.write("----- Cadastro de Médicos -------\n")
    while True:
        name = console.read_line("NOME: ")
        while True:
            crm = console.read_line("CRM: ")
            if len(crm) == 5:
                break
            console.write(
                "\nErro: O número CRM precisa ter exatamente 5 char. Tente novamente.\n"
                f"{len(crm)}\n{crm}\n"
            )
        on_duty = console.ask_yes_no(
            "\nEstá de Plantão? (S / N): ", "Opção inválida. Digite S (Sim) ou N (Não)"
        )
        another = console.ask_yes_no(
            "\nDeseja cadastrar outro médico? (S / N): ",
            "Opção inválida. Digite S (Sim) ou N (Não)",
        )
        registry.append_doctor(Doctor(registry.next_doctor_id(), name, crm, on_duty))
        if not another:
            return


def list_doctors(registry: Registry, console) -> None:
    console.write(
        "-------------------------- Lista Geral de Médicos --------------------------\n\n"
    )
    for _, fields in _doctor_records(registry):
        console.write(_describe(fields) + _RULE)


def show_doctor(registry: Registry, console) -> None:
    """Look doctors up by id, with their patients, until the user stops."""
    while True:
        wanted = console.read_line("Digite o ID do médico: ")
        console.write(_LONG_RULE)
        found = False
        for _, fields in _doctor_records(registry):
            if fields[0] == wanted:
                console.write("Médico encontrado:\n" + _describe(fields) + _RULE)
                found = True
        listing = io.StringIO()
        write_doctor_patients(registry, _to_int(wanted), listing)
        console.write(listing.getvalue())
        if not found:
            console.write("Médico não encontrado. Tente novamente.\n")
        if not console.ask_yes_no(_ANOTHER_ID):
            return


def query_doctors(registry: Registry, console) -> None:
    console.clear()
    console.write("------ CONSULTAR MÉDICOS ------")
    while True:
        choice = console.read_int(
            "\nEscolha a opção desejada: "
            "\n  [1] Consultar médico por ID\n  [2] Consultar lista completa\n\n"
        )
        if choice == 1:
            show_doctor(registry, console)
            return
        if choice == 2:
            list_doctors(registry, console)
            return
        console.write("Opção inválida. Digite novamente.")


def _ask_update(doctor: Doctor, console) -> tuple[str, bool]:
    while True:
        choice = console.read_int(
            "Escolha uma opção: \n  [1] -> Atualizar nome\n  [2] -> Atualizar Plantão\n"
        )
        if choice == 1:
            name = console.read_line("Atualização de nome\n  Digite o nome desejado: ")
            if name == doctor.name:
                console.write("Você não pode inserir o mesmo nome.")
                continue
            return name, doctor.on_duty
        if choice == 2:
            on_duty = console.ask_yes_no(
                "Atualização de plantão\n  O médico está de plantão? (S / N)\n", _DUTY_ERROR
            )
            return doctor.name, on_duty
        console.write("\nOpção inválida. Tente novamente.\n")


def update_doctor(registry: Registry, console) -> None:
    """Change a doctor's name or duty status, by id, until the user stops."""
    console.clear()
    while True:
        wanted = console.read_line("Digite o ID do médico que deseja alterar: ")
        console.write(_LONG_RULE)
        found = False
        for _, fields in _doctor_records(registry):
            if fields[0] == wanted:
                console.write("Médico encontrado:\n" + _describe(fields) + _RULE)
                name, on_duty = _ask_update(_parse_doctor(fields), console)
                found = rewrite_doctor(registry, wanted, name, on_duty)
                break
        if not found:
            console.write("Médico não encontrado no sistema.\n")
        if not console.ask_yes_no(_ANOTHER_ID):
            return


def delete_doctor(registry: Registry, console) -> None:
    """Delete doctors by id, refusing those still responsible for patients."""
    console.clear()
    while True:
        wanted = console.read_line("Digite o ID do médico que deseja deletar: ")
        try:
            attached = patients_of_doctor(registry, wanted)
            if not attached:
                console.write("\nProsseguindo para a deleção...\n")
                console.write(_LONG_RULE)
            found = remove_doctor(registry, wanted)
        except DoctorHasPatients as error:
            for line in error.patient_lines:
                fields = (_fields(line) + [""] * 6)[:6]
                console.write(
                    f"Você não pode deletar o médico {wanted}, pois precisa alterar "
                    "o médico responsável por esses pacientes: \n"
                    f"[{fields[0]}]\n  Nome: {fields[1]}\n  CPF: {fields[2]}\n"
                    f"  ESTADO: {fields[5]}\n" + _RULE
                    + "Vá para a gestão de pacientes e altere os médicos responsáveis.\n"
                )
        else:
            if not found:
                console.write("Médico não encontrado. Tente novamente.\n")
        if not console.ask_yes_no(_ANOTHER_ID):
            return


def manage_doctors(registry: Registry, console) -> bool:
    """Show the doctor menu and run one action.

    Returns False when the user chose to go back to the previous menu.
    """
    console.clear()
    prompt = (
        "Você escolheu gestão de médicos! Escolha o que deseja fazer\n\n"
        " 1 -- CADASTRAR MÉDICO\n 2 -- CONSULTAR MÉDICO\n 3 -- ATUALIZAR MÉDICO\n"
        " 4 -- EXCLUIR MÉDICO\n 5 -- VOLTAR PARA O MENU ANTERIOR\n\n"
    )
    actions = {
        1: register_doctors,
        2: query_doctors,
        3: update_doctor,
        4: delete_doctor,
    }
    while True:
        choice = console.read_int(prompt)
        if choice == 5:
            return False
        action = actions.get(choice)
        if action is not None:
            action(registry, console)
            return True
        console.write("Opção inválida.")