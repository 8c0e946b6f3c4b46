#!/usr/bin/env python3

"""
Pytest coverage for rewriting media urls at deploy time.
"""

# Standard Library
import json
import os
import sys

# PIP3 modules
import pytest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

# local repo modules
from niftylib.core import deployment
from niftylib.core.errors import DeploymentError

#============================================

BASE_URI = "ipfs://bafybeigdyr/"

#============================================

def _write_record(metadata_dir, name: str, record) -> str:
	path = os.path.join(str(metadata_dir), name)
	with open(path, "w") as metadata_file:
		json.dump(record, metadata_file)
	return path

#============================================

@pytest.mark.parametrize("base_uri", ["ipfs://bafybeigdyr", "media/", "/abs/path/"])
def test_invalid_base_uri(base_uri) -> None:
	with pytest.raises(DeploymentError):
		deployment.validate_base_uri(base_uri)

#============================================

def test_rebase_keeps_file_name() -> None:
	assert deployment.rebase_url("/media/7.png", BASE_URI) == BASE_URI + "7.png"
	assert deployment.rebase_url("https://old.host/x/7.mp4", BASE_URI) == \
		BASE_URI + "7.mp4"

#============================================

def test_deploy_updates_media_fields(tmp_path) -> None:
	path = _write_record(tmp_path, "7", {
		"id": 7,
		"image": "/media/7.png",
		"animation_url": "/media/7.mp4",
		"youtube_url": None,
	})
	_write_record(tmp_path, "8", {"id": 8, "image": "/media/8.png",
		"animation_url": None})
	count = deployment.deploy(str(tmp_path), "https://cdn.example.com/nifty/")
	assert count == 2
	with open(path, "r") as metadata_file:
		record = json.load(metadata_file)
	assert record["image"] == "https://cdn.example.com/nifty/7.png"
	assert record["animation_url"] == "https://cdn.example.com/nifty/7.mp4"
	assert record["youtube_url"] is None

#============================================

def test_deploy_skips_records_without_media(tmp_path) -> None:
	path = _write_record(tmp_path, "1", {"id": 1, "image": None})
	before = os.path.getmtime(path)
	assert deployment.deploy(str(tmp_path), BASE_URI) == 0
	assert os.path.getmtime(path) == before

#============================================

def test_deploy_rejects_bad_json(tmp_path) -> None:
	with open(str(tmp_path / "1"), "w") as metadata_file:
		metadata_file.write("{not json")
	with pytest.raises(DeploymentError):
		deployment.deploy(str(tmp_path), BASE_URI)

#============================================

def test_deploy_missing_dir(tmp_path) -> None:
	with pytest.raises(DeploymentError):
		deployment.deploy(str(tmp_path / "missing"), BASE_URI)
