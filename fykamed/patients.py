"""Registration, lookup, update and removal of patients."""

from __future__ import annotations

import re

from fykamed.storage import PATIENT_HEADER, Patient, Registry, State

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_RULE = "----------------------------------------------------------------------\n"
_LONG_RULE = "-----------------------------------------------------------------------\n\n"
_ANOTHER_ID = "Deseja procurar por outro ID? (S / N)"
_YES_NO_ERROR = "Opção inválida. Digite S (Sim) ou N (Não)"
_VALID_STATES = {str(int(state)) for state in State}

_COLUMNS = {"id": 0, "name": 1, "cpf": 2, "age": 3, "doctor_id": 4, "state": 5}


def _fields(line: str) -> list[str]:
    return [piece for piece in line.rstrip("\r\n").split(",") if piece]


def _to_int(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _columns(line: str) -> list[str]:
    """Return the six columns of a patient line, padding missing ones with ''."""
    fields = _fields(line)
    head = (fields + [""] * 5)[:5]
    return [*head, ",".join(fields[5:])]


def _patient_records(registry: Registry):
    """Yield (line, columns) for every patient record, skipping the header."""
    for line in registry.patient_lines():
        if line == PATIENT_HEADER or not _fields(line):
            continue
        yield line, _columns(line)


def _parse_patient(columns: list[str]) -> Patient:
    state_value = _to_int(columns[5])
    try:
        state = State(state_value)
    except ValueError:
        state = state_value
    return Patient(
        _to_int(columns[0]),
        columns[1],
        columns[2],
        _to_int(columns[3]),
        _to_int(columns[4]),
        state,
    )


def _describe(columns: list[str]) -> str:
    patient_id, name, cpf, age, doctor_id, state = columns
    return (
        f"[{patient_id}]\n  Nome: {name}\n  CPF: {cpf}\n  IDADE: {age}\n"
        f"  ID DO MÉDICO RESPONSÁVEL: {doctor_id}\n  ESTADO: {state}\n"
    )


def find_patient(registry: Registry, patient_id) -> Patient | None:
    """Return the patient whose id column equals ``patient_id``, or None."""
    wanted = str(patient_id)
    for _, columns in _patient_records(registry):
        if columns[0] == wanted:
            return _parse_patient(columns)
    return None


def rewrite_patient(registry: Registry, patient_id, fields) -> bool:
    """Replace columns of the patient ``patient_id``; return whether it was found.

    ``fields`` maps column names (name, cpf, age, doctor_id, state) to new values.
    """
    changes = {}
    for key, value in dict(fields).items():
        if key not in _COLUMNS or key == "id":
            raise ValueError(f"unknown patient field: {key!r}")
        changes[_COLUMNS[key]] = str(int(value) if isinstance(value, State) else value)
    wanted = str(patient_id)
    found = False
    lines = []
    for line in registry.patient_lines():
        columns = _columns(line)
        if line != PATIENT_HEADER and _fields(line) and columns[0] == wanted:
            for index, value in changes.items():
                columns[index] = value
            lines.append(",".join(columns))
            found = True
        else:
            lines.append(line)
    if found:
        registry.replace_patient_lines(lines)
    return found


def remove_patient(registry: Registry, patient_id) -> bool:
    """Delete the patient ``patient_id``; return whether it was found."""
    wanted = str(patient_id)
    found = False
    kept = []
    for line in registry.patient_lines():
        fields = _fields(line)
        if fields and fields[0] == wanted:
            found = True
        elif line.strip():
            kept.append(line)
    registry.replace_patient_lines(kept)
    return found


def register_patients(registry: Registry, console) -> None:
    """Ask for patients one after another and append them to the registry."""
    console.clear()
    console.write("----- Cadastro de Pacientes -------\n")
    while True:
        name = console.read_line("NOME: ")
        while True:
            cpf = console.read_line("CPF: ")
            if len(cpf) == 11:
                break
            console.write(
                "\nErro: O CPF precisa ter exatamente 11 char. Tente novamente.\n"
                f"{len(cpf)}\n{cpf}\n"
            )
        age = console.read_int("IDADE: ")
        while True:
            doctor_id = console.read_int("MÉDICO RESPONSAVEL: ")
            if doctor_id != 0 and registry.doctor_exists(doctor_id):
                break
            console.write("Médico não encontrado. Tente novamente.\n")
        while True:
            choice = console.read_int(
                "ESTADO DO PACIENTE: \n  [0] De Alta\n  [1] Leve\n  [2] Moderado\n  [3] Grave\n"
            )
            try:
                state = State(choice)
                break
            except ValueError:
                console.write(
                    "Opção inválida. Digite [0] -> Alta, [1] -> Leve, "
                    "[2] -> Moderado, [3] -> Grave."
                )
        another = console.ask_yes_no(
            "\nDeseja cadastrar outro paciente? (S / N): ", _YES_NO_ERROR
        )
        registry.append_patient(
            Patient(registry.next_patient_id(), name, cpf, age, doctor_id, state)
        )
        if not another:
            return


def list_patients(registry: Registry, console) -> None:
    console.write(
        "-------------------------- Lista Geral de Pacientes --------------------------\n\n"
    )
    for _, columns in _patient_records(registry):
        console.write(_describe(columns) + _RULE)


def show_patient(registry: Registry, console) -> None:
    """Look patients up by id until the user stops."""
    while True:
        wanted = console.read_line("Digite o ID do paciente: ")
        console.write(_LONG_RULE)
        found = False
        for _, columns in _patient_records(registry):
            if columns[0] == wanted:
                console.write("Paciente encontrado:\n" + _describe(columns) + _RULE)
                found = True
        if not found:
            console.write("Paciente não encontrado. Tente novamente.\n")
        if not console.ask_yes_no(_ANOTHER_ID):
            return


def _pause(console) -> None:
    try:
        console.read_line("Pressione Enter para continuar...")
    except EOFError:
        pass


def query_patients(registry: Registry, console) -> None:
    console.clear()
    console.write("------ CONSULTAR PACIENTES ------")
    while True:
        choice = console.read_int(
            "\nEscolha a opção desejada: "
            "\n  [1] Consultar paciente por ID\n  [2] Consultar lista completa"
        )
        if choice == 1:
            show_patient(registry, console)
            break
        if choice == 2:
            list_patients(registry, console)
            break
        console.write("Opção inválida. Digite novamente.")
    _pause(console)


def _ask_update(registry: Registry, columns: list[str], console) -> dict:
    _, name, _, age, doctor_id, state = columns
    while True:
        choice = console.read_int(
            "Escolha uma opção: \n  [1] -> Atualizar nome\n  [2] -> Atualizar Idade\n"
            "  [3] -> Alterar Médico Responsável\n  [4] -> Alterar Estado\n"
        )
        if choice == 1:
            new_name = console.read_line("Atualização de nome\n  Digite o nome desejado: ")
            if new_name == name:
                console.write("Você não pode inserir o mesmo nome.")
                continue
            return {"name": new_name}
        if choice == 2:
            new_age = console.read_line("Atualização de idade\n  Digite a idade desejada: ")
            if new_age == age:
                console.write("Você não pode inserir a mesma idade.")
                continue
            return {"age": new_age}
        if choice == 3:
            new_doctor = console.read_line(
                "Atualização de Médico Responsável\n  Digite o ID do Médico Responsável: "
            )
            if new_doctor == doctor_id:
                console.write("Você não pode inserir o mesmo ID de Médico.")
            elif registry.doctor_exists(new_doctor):
                if state.startswith(str(int(State.SEVERE))):
                    console.write("Você não pode mudar o médico de um paciente internado.\n")
                else:
                    return {"doctor_id": new_doctor}
            else:
                console.write("Medico não encontrado. Digite um ID válido.")
            continue
        if choice == 4:
            new_state = console.read_line(
                "Atualização de estado\n  Digite o estado desejado: \n"
                "  [0] De Alta\n  [1] Leve\n  [2] Moderado\n  [3] Grave\n"
            )
            if new_state == state:
                console.write("\nVocê não pode inserir o mesmo estado.\n")
            elif new_state not in _VALID_STATES:
                console.write("\nDigite um estado válido.\n")
            else:
                return {"state": new_state}
            continue
        console.write("\nOpção inválida. Tente novamente.\n")


def update_patient(registry: Registry, console) -> None:
    """Change one field of a patient, by id, until the user stops."""
    console.clear()
    while True:
        wanted = console.read_line("Digite o ID do paciente que deseja alterar: ")
        console.write(_LONG_RULE)
        found = False
        for _, columns in _patient_records(registry):
            if columns[0] == wanted:
                console.write("Paciente encontrado:\n" + _describe(columns) + _RULE)
                changes = _ask_update(registry, columns, console)
                found = rewrite_patient(registry, wanted, changes)
                break
        if not found:
            console.write("Paciente não encontrado no sistema.\n")
        if not console.ask_yes_no(_ANOTHER_ID):
            return


def delete_patient(registry: Registry, console) -> None:
    """Delete patients by id until the user stops."""
    console.clear()
    while True:
        wanted = console.read_line("Digite o ID do paciente que deseja deletar: ")
        console.write(_LONG_RULE)
        if not remove_patient(registry, wanted):
            console.write("Paciente não encontrado. Tente novamente.\n")
        if not console.ask_yes_no(_ANOTHER_ID):
            return


def manage_patients(registry: Registry, console) -> bool:
    """Show the patient menu and run one action.

    Returns False when the user chose to go back to the previous menu.
    """
    console.clear()
    prompt = (
        "Você escolheu gestão de pacientes! Escolha o que deseja fazer\n\n"
        " 1 -- CADASTRAR PACIENTE\n 2 -- CONSULTAR PACIENTES\n 3 -- ATUALIZAR PACIENTE\n"
        " 4 -- EXCLUIR PACIENTE\n 5 -- VOLTAR PARA O MENU ANTERIOR\n"
    )
    actions = {
        1: register_patients,
        2: query_patients,
        3: update_patient,
        4: delete_patient,
    }
    while True:
        choice = console.read_int(prompt)
        if choice == 5:
            return False
        action = actions.get(choice)
        if action is not None:
            action(registry, console)
            return True
        console.write("Opção inválida, tente novamente.")