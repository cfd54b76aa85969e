import io

import pytest

from fykamed.console import Console
from fykamed.patients import (
    delete_patient,
    find_patient,
    list_patients,
    manage_patients,
    register_patients,
    remove_patient,
    rewrite_patient,
    show_patient,
    update_patient,
)
from fykamed.storage import PATIENT_HEADER, Registry, State


@pytest.fixture
def registry(tmp_path):
    reg = Registry(tmp_path)
    reg.ensure_files()
    reg.replace_doctor_lines(["id,nome,crm,plantao", "1,Ana,12345,true", "2,Bruno,54321,false"])
    reg.replace_patient_lines(
        [
            PATIENT_HEADER,
            "1,Carlos,11122233344,40,1,2",
            "2,Diana,55566677788,30,2,3",
        ]
    )
    return reg


def make_console(*answers):
    text = "".join(answer + "\n" for answer in answers)
    return Console(io.StringIO(text), io.StringIO(), clear_screen=False)


def test_find_patient_parses_columns(registry):
    patient = find_patient(registry, 1)
    assert patient.name == "Carlos"
    assert patient.cpf == "11122233344"
    assert patient.age == 40
    assert patient.doctor_id == 1
    assert patient.state == State.MODERATE


def test_find_patient_missing(registry):
    assert find_patient(registry, 99) is None


def test_rewrite_patient_changes_only_target(registry):
    assert rewrite_patient(registry, 2, {"name": "Daniela"}) is True
    assert find_patient(registry, 2).name == "Daniela"
    assert find_patient(registry, 1).name == "Carlos"
    assert registry.patient_lines()[0] == PATIENT_HEADER


def test_rewrite_patient_missing_leaves_file(registry):
    before = registry.patient_lines()
    assert rewrite_patient(registry, 42, {"age": 10}) is False
    assert registry.patient_lines() == before


def test_rewrite_patient_rejects_unknown_field(registry):
    with pytest.raises(ValueError):
        rewrite_patient(registry, 1, {"height": 180})


def test_remove_patient(registry):
    assert remove_patient(registry, 1) is True
    assert find_patient(registry, 1) is None
    assert registry.patient_lines() == [PATIENT_HEADER, "2,Diana,55566677788,30,2,3"]


def test_remove_patient_missing(registry):
    assert remove_patient(registry, 7) is False
    assert len(registry.patient_lines()) == 3


def test_register_patients_validates_and_appends(registry):
    console = make_console(
        "Eva", "123", "99988877766", "25", "0", "1", "5", "1", "n"
    )
    register_patients(registry, console)
    patient = find_patient(registry, 3)
    assert patient.name == "Eva"
    assert patient.cpf == "99988877766"
    assert patient.age == 25
    assert patient.doctor_id == 1
    assert patient.state == State.MILD
    output = console.output.getvalue()
    assert "O CPF precisa ter exatamente 11 char" in output
    assert "Médico não encontrado. Tente novamente." in output


def test_update_patient_state(registry):
    console = make_console("1", "4", "3", "n")
    update_patient(registry, console)
    assert find_patient(registry, 1).state == State.SEVERE


def test_update_patient_rejects_invalid_state(registry):
    console = make_console("1", "4", "2", "4", "9", "4", "0", "n")
    update_patient(registry, console)
    output = console.output.getvalue()
    assert "Você não pode inserir o mesmo estado." in output
    assert "Digite um estado válido." in output
    assert find_patient(registry, 1).state == State.DISCHARGED


def test_update_patient_refuses_doctor_change_when_severe(registry):
    console = make_console("2", "3", "1", "1", "Dina", "n")
    update_patient(registry, console)
    patient = find_patient(registry, 2)
    assert patient.doctor_id == 2
    assert patient.name == "Dina"
    assert "paciente internado" in console.output.getvalue()


def test_update_patient_changes_doctor(registry):
    console = make_console("1", "3", "2", "n")
    update_patient(registry, console)
    assert find_patient(registry, 1).doctor_id == 2


def test_delete_patient_via_console(registry):
    console = make_console("9", "s", "2", "n")
    delete_patient(registry, console)
    assert find_patient(registry, 2) is None
    assert "Paciente não encontrado. Tente novamente." in console.output.getvalue()


def test_list_patients_shows_every_record(registry):
    console = make_console()
    list_patients(registry, console)
    output = console.output.getvalue()
    assert "[1]\n  Nome: Carlos\n" in output
    assert "[2]\n  Nome: Diana\n" in output
    assert "id,nome" not in output


def test_show_patient_not_found(registry):
    console = make_console("77", "n")
    show_patient(registry, console)
    assert "Paciente não encontrado. Tente novamente." in console.output.getvalue()


def test_manage_patients_back(registry):
    console = make_console("8", "5")
    assert manage_patients(registry, console) is False
    assert "Opção inválida, tente novamente." in console.output.getvalue()