#!/usr/bin/env python3

"""
Pytest coverage for the generate and deploy commands.
"""

# Standard Library
import io
import json
import os
import sys

# PIP3 modules
import pytest
import yaml

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

# tests helpers
TESTS_DIR = os.path.abspath(os.path.dirname(__file__))
if TESTS_DIR not in sys.path:
	sys.path.insert(0, TESTS_DIR)
from catalog_utils import write_layer

# local repo modules
import nifty_cli
from niftylib.core import utils

#============================================

@pytest.fixture(autouse=True)
def reset_quiet_mode():
	yield
	utils.set_quiet_mode(False)

#============================================

def _write_source(tmp_path) -> str:
	write_layer(str(tmp_path / "eyes.png"))
	config = {
		"name": "Nifty #{id}",
		"description": "cli collection",
		"supply": 3,
		"start_token": 1,
		"attributes": [
			{"name": "Eyes", "options": {"Open": "eyes.png"}},
			{"name": "Background", "options": {
				"Red": {"color": "#ff0000"},
				"Blue": {"color": "#0000ff"},
			}},
		],
	}
	with open(str(tmp_path / "config.yaml"), "w") as config_file:
		yaml.safe_dump(config, config_file, sort_keys=False)
	return str(tmp_path)

#============================================

def test_parse_generate_defaults() -> None:
	args = nifty_cli.parse_args(["generate", "src"])
	assert args.command == "generate"
	assert args.config == "config.yaml"
	assert args.output == "output"
	assert args.media == "media"
	assert args.metadata == "metadata"
	assert args.seed is None
	assert args.verbosity == 1
	assert not args.force
	assert not args.dry_run

#============================================

def test_deploy_requires_base_uri() -> None:
	with pytest.raises(SystemExit):
		nifty_cli.parse_args(["deploy", "src"])

#============================================

def test_generate_then_deploy(tmp_path) -> None:
	source_dir = _write_source(tmp_path)
	assert nifty_cli.main(["generate", source_dir, "-f", "-q", "-s", "9"]) == 0
	media_dir = os.path.join(source_dir, "output", "media")
	metadata_dir = os.path.join(source_dir, "output", "metadata")
	assert sorted(os.listdir(media_dir)) == ["1.png", "2.png", "3.png"]
	assert sorted(os.listdir(metadata_dir)) == ["1", "2", "3"]
	base_uri = "https://cdn.example.com/nifty/"
	assert nifty_cli.main(["deploy", source_dir, "--base-uri", base_uri, "-q"]) == 0
	with open(os.path.join(metadata_dir, "2"), "r") as metadata_file:
		record = json.load(metadata_file)
	assert record["image"] == base_uri + "2.png"

#============================================

def test_existing_output_without_confirmation_fails(tmp_path, monkeypatch) -> None:
	source_dir = _write_source(tmp_path)
	(tmp_path / "output").mkdir()
	monkeypatch.setattr("builtins.input", lambda prompt: "n")
	assert nifty_cli.main(["generate", source_dir, "-q"]) == 1

#============================================

def test_dry_run_writes_nothing(tmp_path) -> None:
	source_dir = _write_source(tmp_path)
	assert nifty_cli.main(["generate", source_dir, "-n", "-q"]) == 0
	assert not os.path.exists(os.path.join(source_dir, "output"))

#============================================

def test_bad_base_uri_returns_error(tmp_path) -> None:
	source_dir = _write_source(tmp_path)
	assert nifty_cli.main(["deploy", source_dir, "--base-uri", "no-slash", "-q"]) == 1

#============================================

def test_existing_output_with_empty_stdin_fails(tmp_path, monkeypatch) -> None:
	source_dir = _write_source(tmp_path)
	(tmp_path / "output").mkdir()
	monkeypatch.setattr(sys, "stdin", io.StringIO(""))
	assert nifty_cli.main(["generate", source_dir, "-q"]) == 1
	assert os.listdir(str(tmp_path / "output")) == []
