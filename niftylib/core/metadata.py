#!/usr/bin/env python3

"""
OpenSea style token metadata.

Field order follows the marketplace documentation: id, name,
description, image, external_url, attributes, background_color,
animation_url, youtube_url. Optional fields are written as null.
"""

import json
import os
import posixpath
from niftylib.core import utils
from niftylib.core.errors import PersistenceError

#============================================

def media_url(media_dir: str, filepath: str) -> str:
	"""
	Path of a media file relative to the media folder name, e.g. /media/7.png.
	"""
	media_name = os.path.basename(os.path.normpath(media_dir))
	return posixpath.join("/", media_name, os.path.basename(filepath))

#============================================

def attribute_entries(selections: list) -> list:
	entries = []
	for selection in selections:
		if not selection.attribute.metadata:
			continue
		entries.append({
			'trait_type': selection.attribute.name,
			'value': selection.value,
		})
	return entries

#============================================

def build_metadata(token_id: int, name_template: str, description: str,
	image: str, attributes: list, external_url_template: str = None,
	background_color: str = None, animation_url: str = None) -> dict:
	if background_color is not None:
		background_color = background_color.replace('#', '')
	return {
		'id': token_id,
		'name': utils.expand_template(name_template, token_id),
		'description': description,
		'image': image,
		'external_url': utils.expand_template(external_url_template, token_id),
		'attributes': attributes,
		'background_color': background_color,
		'animation_url': animation_url,
		'youtube_url': None,
	}

#============================================

def write_metadata(metadata_dir: str, token_id: int, record: dict) -> str:
	metadata_path = os.path.join(metadata_dir, str(token_id))
	utils.get_logger().debug(f"saving token {token_id} metadata as '{metadata_path}'")
	try:
		with open(metadata_path, 'w') as metadata_file:
			json.dump(record, metadata_file, indent=2)
	except (OSError, TypeError, ValueError) as error:
		raise PersistenceError(f"error saving {metadata_path}: {error}") from error
	return metadata_path
