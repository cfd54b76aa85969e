"""Main menu and the program loop that ends each session with a report."""

from __future__ import annotations

import argparse
from pathlib import Path

from fykamed.console import Console
from fykamed.doctors import manage_doctors
from fykamed.patients import manage_patients
from fykamed.report import generate_report
from fykamed.storage import Registry
from fykamed.triage import show_queue

_MENU = (
    "Olá, escolha uma das opções ou feche o programa\n\n"
    " 1 -- GESTÃO DE PACIENTES\n 2 -- GESTÃO DE MÉDICOS\n"
    " 3 -- FILA DE ATENDIMENTO\n 4 -- SAIR DO SISTEMA\n"
)
_RESTART = "\nDeseja reiniciar o sistema? (1 = sim, 0 = não): "


def main_menu(registry: Registry, console: Console) -> None:
    """Show the main menu until one action has been carried out or the user leaves."""
    while True:
        console.clear()
        choice = console.read_int(_MENU)
        if choice == 1:
            if manage_patients(registry, console):
                return
        elif choice == 2:
            if manage_doctors(registry, console):
                return
        elif choice == 3:
            show_queue(registry, console)
        elif choice == 4:
            console.write("Você saiu do sistema.\n")
            return
        else:
            console.write("Número inválido!")


def run(registry: Registry, console: Console, directory=None) -> int:
    """Run sessions until the user declines a restart; return the exit status.

    Each session ends by writing the daily report into ``directory``
    (by default the registry's own directory).
    """
    while True:
        console.clear()
        try:
            registry.ensure_files()
        except OSError:
            console.write("Erro ao abrir lista de médicos.\n")
            return 1

        main_menu(registry, console)

        try:
            path = generate_report(registry, directory)
        except OSError:
            console.write("Não foi possível executar a tarefa.")
        else:
            console.write(f"Relatório '{path.name}' criado.\n")

        if console.read_int(_RESTART) == 0:
            break

    console.write("\nSistema encerrado.\n")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="fykamed",
        description="Gestão de médicos e pacientes com relatório diário.",
    )
    parser.add_argument(
        "--data-dir",
        default=".",
        help="diretório dos arquivos medicos.csv e pacientes.csv",
    )
    parser.add_argument(
        "--report-dir",
        default=None,
        help="diretório onde o relatório é gravado (padrão: o dos dados)",
    )
    args = parser.parse_args(argv)

    registry = Registry(Path(args.data_dir))
    console = Console()
    try:
        return run(registry, console, args.report_dir)
    except (EOFError, KeyboardInterrupt):
        console.write("\nSistema encerrado.\n")
        return 0


if __name__ == "__main__":
    raise SystemExit(main())