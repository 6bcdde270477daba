"""Tests for the policy description script."""

from __future__ import annotations

import importlib.util
import json
from pathlib import Path

import pytest

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "describe_stamp_policies.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("describe_stamp_policies", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_prints_policies_of_imported_models(capsys):
    _load_script().main(["stamped_models"])

    output = capsys.readouterr().out
    assert "stamped_models.Document\n  on create: u_created, u_updated\n  on update: u_updated" in output
    assert "stamped_models.Ticket\n  on create: opened_by\n  on update: touched_by" in output


def test_emits_json(capsys):
    _load_script().main(["stamped_models", "--json"])

    policies = json.loads(capsys.readouterr().out)
    assert policies["stamped_models.Document"] == {
        "on_create": ["u_created", "u_updated"],
        "on_update": ["u_updated"],
    }


def test_unknown_module_exits_with_message():
    with pytest.raises(SystemExit, match="Could not import"):
        _load_script().main(["no_such_models_module"])
