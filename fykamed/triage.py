"""The attendance queue: discharged patients and those waiting by severity."""

from __future__ import annotations

from fykamed.storage import Registry, State, extract_state

_ROW = "ID: {} | Nome: {} | CPF: {} | Idade: {} | Médico: {} | Estado: {}\n"


def _columns(line: str) -> list[str]:
    fields = [piece for piece in line.rstrip("\r\n").split(",") if piece]
    head = (fields + [""] * 5)[:5]
    return [*head, ",".join(fields[5:])]


def build_queue(lines) -> tuple[list[str], list[str]]:
    """Split patient lines into discharged ones and a queue, most severe first."""
    discharged: list[str] = []
    waiting: list[str] = []
    for line in lines:
        if "ID" in line or line.split(",", 1)[0] == "id":
            continue
        state = extract_state(line)
        if state is None:
            continue
        (discharged if state == State.DISCHARGED else waiting).append(line)
    waiting.sort(key=extract_state, reverse=True)
    return discharged, waiting


def render_queue(discharged, waiting) -> str:
    parts = ["\n\033[32m--- PACIENTES COM ALTA ---\033[0m\n"]
    parts.extend(_ROW.format(*_columns(line)) for line in discharged)
    parts.append("\n\033[33m--- PACIENTES EM FILA ---\033[0m\n")
    for line in waiting:
        if extract_state(line) == State.SEVERE:
            parts.append("\033[31mINTERNAÇÃO:\033[0m ")
        parts.append(_ROW.format(*_columns(line)))
    return "".join(parts)


def show_queue(registry: Registry, console) -> None:
    """Display the queue and wait until the user types 0."""
    console.clear()
    if not registry.patients_path.exists():
        console.write("Erro ao abrir pacientes.csv\n")
        return
    console.write(render_queue(*build_queue(registry.patient_lines())))
    while console.read_int("Digite '0' para voltar ao menu principal.") != 0:
        pass