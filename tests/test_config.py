#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import pytest

from GlycoEM.config import Config
from GlycoEM.data.system import System

CONFIG_TEXT = """
# GlycoEM test configuration
structure = model.pdb
output = results
verbose = 1
residues = ['GLC', 'MAN']
residues = NAG
substituent_radius = 1.7
pyranose_bond_rmsd = 0.05
"""


@pytest.fixture
def config_file(tmp_path):
    def _write(text):
        path = tmp_path / "glycoem.conf"
        path.write_text(text)
        return str(path)
    return _write


@pytest.fixture
def fake_structure(monkeypatch, glucose, structure_of):
    structure = structure_of(glucose())
    loaded = []

    def add_structure(self, structure_file):
        loaded.append(structure_file)
        return structure

    monkeypatch.setattr(Config, "add_structure", add_structure)
    return structure, loaded


def test_load_config(config_file, fake_structure):
    structure, loaded = fake_structure
    config = Config()
    system = config.load_config(config_file(CONFIG_TEXT))

    assert isinstance(system, System)
    assert loaded == ["model.pdb"]
    assert system.structure is structure
    assert system.config is config
    assert config.residues == ["GLC", "MAN", "NAG"]
    assert config.substituent_radius == 1.7
    assert config.pyranose_bond_rmsd == 0.05


def test_only_provided_attributes_reach_the_system(config_file, fake_structure):
    system = Config().load_config(config_file(CONFIG_TEXT))
    assert system.output == "results"
    assert system.verbose == 1
    assert system.residues == ["GLC", "MAN", "NAG"]
    # not set in the file
    assert system.exclude == []
    assert system.overwrite is False


def test_analysis_parameters_stay_on_the_config(config_file, fake_structure):
    system = Config().load_config(config_file(CONFIG_TEXT))
    assert system.config.substituent_radius == 1.7
    assert system.config.pyranose_bond_rmsd == 0.05
    for key in ("substituent_radius", "pyranose_bond_rmsd", "nonbond_cutoff"):
        assert not hasattr(system, key)


def test_unknown_key_raises(config_file, fake_structure):
    with pytest.raises(RuntimeError):
        Config().load_config(config_file("structure = model.pdb\nmystery = 3\n"))


def test_private_key_is_unknown():
    with pytest.raises(RuntimeError):
        Config()._process_line("_provided = 1")


def test_missing_config_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config().load_config(str(tmp_path / "missing.conf"))


def test_lines_without_assignment_are_ignored():
    config = Config()
    config._process_line("just some words")
    assert config._provided == set()


@pytest.mark.parametrize(
    "overrides",
    [{"substituent_radius": 0.0},
     {"substituent_radius": 6.0, "nonbond_cutoff": 5.0},
     {"furanose_angle_rmsd_min": 7.5, "furanose_angle_rmsd_max": 4.0},
    ],
)
def test_validate_rejects(overrides):
    with pytest.raises(ValueError):
        Config(**overrides).validate()


def test_create_system_needs_a_structure():
    with pytest.raises(ValueError):
        Config().create_system()


def test_create_system_with_structure(glucose, structure_of):
    structure = structure_of(glucose())
    system = Config().create_system(structure)
    assert system.structure is structure
    assert system.output == "."
