#!/usr/bin/env python3

import os
import shutil
from niftylib.core import utils
from niftylib.core.errors import OutputDirectoryError

#============================================

def prepare_output_dirs(source_dir: str, output: str, media: str,
	metadata: str, clear: bool = False) -> tuple:
	"""
	Create a fresh output tree and return (output_dir, media_dir, metadata_dir).

	An existing output directory is only removed when clear is set, since
	leftover tokens from an older catalog would mix with the new run.
	"""
	logger = utils.get_logger()
	logger.debug("checking output directories...")
	output_dir = os.path.join(source_dir, output)
	if os.path.isdir(output_dir):
		if not clear:
			raise OutputDirectoryError(
				f"output directory '{output_dir}' already exists and needs to be cleared"
			)
		logger.warning(f"clearing existing output directory '{output_dir}'")
		shutil.rmtree(output_dir)
	elif os.path.exists(output_dir):
		raise OutputDirectoryError(f"output path '{output_dir}' is not a directory")
	media_dir = os.path.join(output_dir, media)
	metadata_dir = os.path.join(output_dir, metadata)
	try:
		os.makedirs(media_dir)
		os.makedirs(metadata_dir, exist_ok=True)
	except OSError as error:
		raise OutputDirectoryError(
			f"could not create output directories under {output_dir}: {error}"
		) from error
	return (output_dir, media_dir, metadata_dir)
