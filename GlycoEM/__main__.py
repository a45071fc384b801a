#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# This file is part of the GlycoEM software.
#
# Copyright (c) 2026 - Topf Group & Leibniz Institute for Virology (LIV),
# Hamburg, Germany.
#
# This module was developed by:
#   Aaron Sweeney    <aaron.sweeney AT cssb-hamburg.de>


from __future__ import annotations
import argparse
import os
import sys
import traceback

import GlycoEM
from GlycoEM.protocol_spec import REGISTRY, SHORT_ALIASES
from GlycoEM.config import Config
from GlycoEM.messages import Messages



def load_system(conf_file: str):
    cfg = Config()
    return cfg.load_config(conf_file)

def _flag_name(proto_key: str) -> str:
    # sugar_validation -> --sugar-validation
    return "--" + proto_key.replace("_", "-")

def build_parser() -> argparse.ArgumentParser:

    p = argparse.ArgumentParser(
        prog="glycoem",
        description="GlycoEM command-line interface",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    p.add_argument(
        "-V", "--version",
        action="version",
        version=f"%(prog)s {GlycoEM.__version__}",
    )

    p.add_argument("config", help="Path to GlycoEM configuration file")

    shared = p.add_argument_group("shared protocol options")

    shared.add_argument("--output", type=str, default=None,
                        help="Output directory")
    shared.add_argument("-v", "--verbose", action="store_true",
                        help="Print per-sugar messages and progress")

    # Protocol selection flags
    sel = p.add_argument_group("protocol selection")
    for key, spec in REGISTRY.items():
        long_flag = _flag_name(key)
        short_flag = SHORT_ALIASES.get(key)
        flags = [long_flag] + ([short_flag] if short_flag else [])
        sel.add_argument(*flags, dest=f"run_{key}", action="store_true", help=spec.help or f"Run {key}")

    for spec in REGISTRY.values():
        if spec.add_args:
            spec.add_args(p)

    return p

def selected_protocols(args: argparse.Namespace) -> list[str]:
    picked = [k for k in REGISTRY.keys() if getattr(args, f"run_{k}", False)]
    return picked or ["sugar_validation"]

def resolve_protocol_order(selected: list[str], args: argparse.Namespace) -> list[str]:
    ordered: list[str] = []
    temp: set[str] = set()
    perm: set[str] = set()

    def visit(name: str) -> None:
        if name in perm:
            return
        if name in temp:
            raise RuntimeError(f"Dependency cycle detected at '{name}'")
        if name not in REGISTRY:
            raise KeyError(f"Unknown protocol '{name}'")
        temp.add(name)
        for dep in REGISTRY[name].deps(args):
            visit(dep)
        temp.remove(name)
        perm.add(name)
        ordered.append(name)

    for s in selected:
        visit(s)

    return ordered

def apply_overrides(system, args: argparse.Namespace) -> None:
    # Keep this as the only place the System is mutated from the CLI
    config = system.config

    if getattr(args, "output", None) is not None:
        system.output = args.output

    if getattr(args, "verbose", False):
        system.verbose = True
        config.verbose = True

    if getattr(args, "residues", None):
        system.residues = list(args.residues)

    if getattr(args, "exclude", None):
        system.exclude = list(args.exclude)

    if getattr(args, "substituent_radius", None) is not None:
        config.substituent_radius = args.substituent_radius
        config.validate()

    system.write_results = not getattr(args, "no_json", False)

def build_pipeline(system, ordered_protocols: list[str]) -> None:
    for name in ordered_protocols:
        system.add_protocol(REGISTRY[name].cls(system))

def main(argv=None) -> None:
    args = build_parser().parse_args(argv)
    print(Messages.intro(GlycoEM.__version__))

    if not os.path.exists(args.config):
        print("Config not found:", args.config)
        sys.exit(1)

    try:
        system = load_system(args.config)

        apply_overrides(system, args)

        selected = selected_protocols(args)
        order = resolve_protocol_order(selected, args)

        build_pipeline(system, order)

        system.run()
        system.write_log()

    except Exception as err:
        print(Messages.fatal_exception("GlycoEM CLI", err))
        traceback.print_exc()
        sys.exit(1)

if __name__ == "__main__":
    main()
