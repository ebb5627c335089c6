import os

import pytest

APOC_EXPORT = (
    '"_id","_labels","name","age","hobbies","_start","_end","_type","since"\n'
    '"1",":Person","John","30","[""chess"",""go""]",,,,\n'
    '"2",":Person:Employee","Jane","25.5",,,,,\n'
    '"3",":Company","ACME, Inc.",,,,,,\n'
    ',,,,,"1","3","WORKS_FOR","2020-01-01"\n'
    ',,,,,"1","2","KNOWS",\n'
)


@pytest.fixture()
def write_yaml(tmp_path):
    def _write(text, name="conversion.yaml"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture()
def apoc_export(tmp_path):
    path = tmp_path / "neo4j-export.csv"
    path.write_text(APOC_EXPORT, encoding="utf-8")
    return str(path)


@pytest.fixture()
def clean_env(monkeypatch, tmp_path):
    # shell settings must not leak into the defaults under test
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.startswith("NEPTUNE_"):
            monkeypatch.delenv(key)
