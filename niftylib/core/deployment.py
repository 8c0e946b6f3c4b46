#!/usr/bin/env python3

import json
import os
import posixpath
import urllib.parse
from niftylib.core import utils
from niftylib.core.errors import DeploymentError

URL_FIELDS = ('image', 'animation_url')

#============================================

def validate_base_uri(base_uri: str) -> str:
	if not base_uri.endswith('/'):
		raise DeploymentError(f"base uri of '{base_uri}' does not end with a '/'")
	parsed = urllib.parse.urlparse(base_uri)
	if parsed.scheme == '' or parsed.netloc == '':
		raise DeploymentError(f"unable to parse {base_uri} as an absolute url")
	return base_uri

#============================================

def rebase_url(value: str, base_uri: str) -> str:
	"""
	Point a relative or absolute media url at base_uri, keeping the file name.
	"""
	path = urllib.parse.urlparse(value).path
	file_name = posixpath.basename(path)
	if file_name == '':
		raise DeploymentError(f"no file name in media url {value!r}")
	# urljoin ignores schemes it does not know, such as ipfs
	return base_uri + file_name

#============================================

def update_record(record: dict, base_uri: str) -> bool:
	logger = utils.get_logger()
	updated = False
	for field_name in URL_FIELDS:
		value = record.get(field_name)
		if not isinstance(value, str) or value == '':
			continue
		record[field_name] = rebase_url(value, base_uri)
		logger.debug(f"updated url of '{field_name}' to '{record[field_name]}'")
		updated = True
	return updated

#============================================

def deploy(metadata_dir: str, base_uri: str) -> int:
	logger = utils.get_logger()
	validate_base_uri(base_uri)
	if not os.path.isdir(metadata_dir):
		raise DeploymentError(f"unable to read metadata from {metadata_dir}")
	count = 0
	for name in sorted(os.listdir(metadata_dir)):
		path = os.path.join(metadata_dir, name)
		if not os.path.isfile(path):
			continue
		logger.debug(f"reading metadata from '{path}'...")
		try:
			with open(path, 'r') as metadata_file:
				record = json.load(metadata_file)
		except (OSError, ValueError) as error:
			raise DeploymentError(f"unable to read metadata as JSON from {path}") from error
		if not isinstance(record, dict):
			raise DeploymentError(f"metadata in {path} is not a JSON object")
		if not update_record(record, base_uri):
			logger.debug(f"no changes made to '{path}'...")
			continue
		try:
			with open(path, 'w') as metadata_file:
				json.dump(record, metadata_file, indent=2)
		except OSError as error:
			raise DeploymentError(f"unable to write metadata to {path}: {error}") from error
		count += 1
	logger.info(f"updated media urls in {count} metadata files")
	return count
