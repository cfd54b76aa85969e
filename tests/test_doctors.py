import io

import pytest

from fykamed.console import Console
from fykamed.doctors import (
    DoctorHasPatients,
    delete_doctor,
    find_doctor,
    list_doctors,
    manage_doctors,
    patients_of_doctor,
    query_doctors,
    register_doctors,
    remove_doctor,
    rewrite_doctor,
    show_doctor,
    update_doctor,
)
from fykamed.storage import DOCTOR_HEADER, PATIENT_HEADER, Doctor, Patient, Registry, State


@pytest.fixture
def registry(tmp_path):
    reg = Registry(tmp_path)
    reg.ensure_files()
    return reg


def _console(text):
    return Console(io.StringIO(text), io.StringIO(), clear_screen=False)


def _seed(registry):
    registry.append_doctor(Doctor(1, "Ana", "12345", True))
    registry.append_doctor(Doctor(2, "Bruno", "54321", False))
    registry.append_patient(Patient(1, "Carla", "11122233344", 30, 1, State.MILD))


def test_find_doctor(registry):
    _seed(registry)
    assert find_doctor(registry, 2) == Doctor(2, "Bruno", "54321", False)
    assert find_doctor(registry, 9) is None


def test_patients_of_doctor(registry):
    _seed(registry)
    assert patients_of_doctor(registry, 1) == ["1,Carla,11122233344,30,1,1"]
    assert patients_of_doctor(registry, 2) == []


def test_rewrite_doctor_keeps_crm(registry):
    _seed(registry)
    assert rewrite_doctor(registry, 2, "Beto", True)
    assert find_doctor(registry, 2) == Doctor(2, "Beto", "54321", True)
    assert registry.doctor_lines()[0] == DOCTOR_HEADER


def test_rewrite_missing_doctor(registry):
    _seed(registry)
    before = registry.doctor_lines()
    assert not rewrite_doctor(registry, 7, "X", False)
    assert registry.doctor_lines() == before


def test_remove_doctor_with_patients_raises(registry):
    _seed(registry)
    with pytest.raises(DoctorHasPatients) as info:
        remove_doctor(registry, 1)
    assert info.value.patient_lines == ["1,Carla,11122233344,30,1,1"]
    assert find_doctor(registry, 1) is not None and find_doctor(registry, 1).name == "Ana"


def test_remove_doctor(registry):
    _seed(registry)
    assert remove_doctor(registry, 2)
    assert find_doctor(registry, 2) is None
    assert registry.count_doctors() == 1


def test_register_doctors(registry):
    console = _console("Ana\n123\n12345\nS\nS\nBruno\n54321\nn\nN\n")
    register_doctors(registry, console)
    assert registry.doctor_lines() == [DOCTOR_HEADER, "1,Ana,12345,true", "2,Bruno,54321,false"]
    assert "precisa ter exatamente 5 char" in console.output.getvalue()


def test_list_doctors(registry):
    _seed(registry)
    console = _console("")
    list_doctors(registry, console)
    out = console.output.getvalue()
    assert "[1]\n  Nome: Ana\n  CRM: 12345\n  Plantão: true\n" in out
    assert out.index("Ana") < out.index("Bruno")


def test_show_doctor_lists_patients(registry):
    _seed(registry)
    console = _console("1\nN\n")
    show_doctor(registry, console)
    out = console.output.getvalue()
    assert "Médico encontrado:" in out
    assert "Carla" in out


def test_show_doctor_missing(registry):
    _seed(registry)
    console = _console("8\nN\n")
    show_doctor(registry, console)
    assert "Médico não encontrado. Tente novamente." in console.output.getvalue()


def test_query_doctors_rejects_then_lists(registry):
    _seed(registry)
    console = _console("7\n2\n")
    query_doctors(registry, console)
    out = console.output.getvalue()
    assert "Opção inválida. Digite novamente." in out
    assert "Lista Geral de Médicos" in out


def test_update_doctor_duty(registry):
    _seed(registry)
    console = _console("1\n2\nn\nN\n")
    update_doctor(registry, console)
    assert find_doctor(registry, 1) == Doctor(1, "Ana", "12345", False)


def test_delete_doctor_refused(registry):
    _seed(registry)
    console = _console("1\nN\n")
    delete_doctor(registry, console)
    assert find_doctor(registry, 1) is not None
    assert "altere os médicos responsáveis" in console.output.getvalue()


def test_delete_doctor(registry):
    _seed(registry)
    console = _console("2\nN\n")
    delete_doctor(registry, console)
    assert find_doctor(registry, 2) is None
    assert "Prosseguindo para a deleção..." in console.output.getvalue()


def test_manage_doctors_back(registry):
    console = _console("9\n5\n")
    assert manage_doctors(registry, console) is False
    assert "Opção inválida." in console.output.getvalue()


def test_manage_doctors_runs_action(registry):
    console = _console("1\nAna\n12345\nS\nN\n")
    assert manage_doctors(registry, console) is True
    assert find_doctor(registry, 1) == Doctor(1, "Ana", "12345", True)
    assert registry.patient_lines() == [PATIENT_HEADER]