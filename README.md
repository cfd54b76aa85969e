# fykamed

A small terminal system for a clinic. It keeps doctors and patients in two
CSV files, shows the care queue ordered by severity, and writes a report
each time a session ends. The prompts and the report are in Portuguese.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running

```
fykamed
fykamed --data-dir dados --report-dir relatorios
```

Options:

- `--data-dir DIR`: directory holding `medicos.csv` and `pacientes.csv`
  (default: the current directory). Missing files are created with their
  header line.
- `--report-dir DIR`: directory the report is written to (default: the data
  directory).

The main menu offers:

1. **Gestão de pacientes**: register, look up (by id or the full list),
   update or delete patients.
2. **Gestão de médicos**: register, look up (by id, with the doctor's
   patients, or the full list), update or delete doctors.
3. **Fila de atendimento**: discharged patients, followed by the waiting
   queue, most severe first; state 3 entries are flagged `INTERNAÇÃO`. Type
   `0` to return to the main menu.
4. **Sair do sistema**: leave the menu.

Choosing `5` in a management menu goes back to the main menu. After one
action has been carried out (or after choosing 4) a report named
`relatorio_<dia>-<mês>-<ano>.txt` is written with patient totals by state,
the number of doctors, and every doctor with a box per patient. You are then
asked whether to restart; answering `0` ends the program. End of input or
Ctrl-C also ends it. The screen is cleared between menus only when output
is a terminal.

## Data files

Doctors, one per line:

```
id,nome,crm,plantao
1,Ana Souza,CRM01,true
```

Patients, one per line, where `estado` is `0` (discharged), `1` (mild),
`2` (moderate) or `3` (serious, admission):

```
id,nome,cpf,idade,idmed,estado
1,Carlos Lima,cpf-exemplo,40,1,2
```

New records get the id of the file's last line plus one. When registering,
a CRM must be exactly 5 characters, a CPF exactly 11, and the responsible
doctor must already exist. A doctor who still has patients cannot be
deleted, and a patient in state 3 cannot be moved to another doctor.
Updates and deletions rewrite the file through a `*_temp.csv` file that
replaces the original.

## Using it from Python

- `fykamed.storage`: `Registry(directory)` with `ensure_files()`,
  `next_doctor_id()`, `next_patient_id()`, `doctor_exists()`,
  `count_patients(state)`, `count_doctors()`, `doctor_lines()`,
  `patient_lines()`, `append_doctor()`, `append_patient()`,
  `replace_doctor_lines()`, `replace_patient_lines()`; the `Doctor` and
  `Patient` dataclasses with `to_row()`; the `State` enum; and the helpers
  `extract_state`, `extract_doctor_id`, `last_id` and `count_records`.
- `fykamed.doctors`: `find_doctor`, `patients_of_doctor`, `rewrite_doctor`
  and `remove_doctor` (which raises `DoctorHasPatients` when patients still
  name the doctor), plus the interactive screens.
- `fykamed.patients`: `find_patient`, `rewrite_patient` (taking a mapping of
  `name`, `cpf`, `age`, `doctor_id`, `state`) and `remove_patient`, plus the
  interactive screens.
- `fykamed.triage`: `build_queue(lines)` and `render_queue(discharged, waiting)`.
- `fykamed.report`: `format_patient_card`, `write_doctor_patients`,
  `report_filename`, `build_report` and `generate_report(registry, directory, day)`.
- `fykamed.console.Console`: the line-oriented input/output used by the
  screens; it takes any text streams, which makes scripted sessions easy.
- `fykamed.cli`: `main_menu`, `run` and `main(argv=None)`.

## What it does not do

It has no locking, so two sessions on the same files can overwrite each
other's changes. It does not check records edited by hand in the CSV files,
and it keeps no history of changes: an update or deletion replaces the
stored line.