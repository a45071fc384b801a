#!/usr/bin/env python3
# -*- coding: utf-8 -*-

import json

import pytest

from GlycoEM import __main__ as cli
from GlycoEM.config import Config
from GlycoEM.protocol_spec import REGISTRY
from GlycoEM.protocols.sugar_validation import SugarValidation


def test_default_protocol_is_sugar_validation():
    args = cli.build_parser().parse_args(["run.conf"])
    assert cli.selected_protocols(args) == ["sugar_validation"]
    assert cli.resolve_protocol_order(["sugar_validation"], args) == ["sugar_validation"]


def test_unknown_protocol_raises():
    args = cli.build_parser().parse_args(["run.conf"])
    with pytest.raises(KeyError):
        cli.resolve_protocol_order(["dock"], args)


def test_registry_entries():
    spec = REGISTRY["sugar_validation"]
    assert spec.cls is SugarValidation
    assert spec.deps(None) == ()


def test_apply_overrides(glucose, structure_of):
    system = Config().create_system(structure_of(glucose()))
    args = cli.build_parser().parse_args(
        ["run.conf", "-s", "--output", "out", "-v", "-r", "GLC", "BGC",
         "--substituent-radius", "1.6", "--no-json"]
    )
    cli.apply_overrides(system, args)

    assert system.output == "out"
    assert system.verbose and system.config.verbose
    assert system.residues == ["GLC", "BGC"]
    assert system.config.substituent_radius == 1.6
    assert system.write_results is False


def test_apply_overrides_validates_radius(glucose, structure_of):
    system = Config().create_system(structure_of(glucose()))
    args = cli.build_parser().parse_args(["run.conf", "--substituent-radius", "9.0"])
    with pytest.raises(ValueError):
        cli.apply_overrides(system, args)


def test_main_end_to_end(glucose, structure_of, monkeypatch, tmp_path):
    structure = structure_of(glucose())
    monkeypatch.setattr(Config, "add_structure", lambda self, path: structure)

    conf = tmp_path / "run.conf"
    conf.write_text("structure = model.pdb\n")
    out = tmp_path / "out"

    cli.main([str(conf), "--output", str(out)])

    with open(out / "sugars.json") as f:
        data = json.load(f)
    assert data["sugars"][0]["conformation"] == "4C1"
    assert (out / "log.out").exists()


def test_main_missing_config_exits(tmp_path):
    with pytest.raises(SystemExit):
        cli.main([str(tmp_path / "missing.conf")])
