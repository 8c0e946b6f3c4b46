#!/usr/bin/env python3

import os
from niftylib.core import output
from niftylib.core import sampler
from niftylib.core import utils
from niftylib.core.generator import CollectionGenerator
from niftylib.core.loader import CatalogLoader
from niftylib.media import ffmpeg

#============================================

class NiftyProject():
	def __init__(self, source_dir: str, config_file: str = 'config.yaml',
		output_dir: str = 'output', media: str = 'media', metadata: str = 'metadata',
		seed: int = None, strict_weights: bool = False, clear_output: bool = False,
		dry_run: bool = False):
		self.source_dir = os.path.abspath(source_dir)
		self.config_file = os.path.join(self.source_dir, config_file)
		self.output_dir = output_dir
		self.media = media
		self.metadata = metadata
		self.seed = seed
		self.clear_output = clear_output
		self.dry_run = dry_run
		loader = CatalogLoader(self.config_file, source_dir=self.source_dir,
			strict_weights=strict_weights)
		self.catalog = loader.load()

	#============================
	def run(self):
		if self.dry_run:
			self.validate()
			return None
		(_, media_dir, metadata_dir) = output.prepare_output_dirs(self.source_dir,
			self.output_dir, self.media, self.metadata, clear=self.clear_output)
		generator = CollectionGenerator(self.catalog, media_dir, metadata_dir,
			seed=self.seed)
		return generator.run()

	#============================
	def validate(self) -> list:
		"""
		Sample once without writing anything and log the selection report.
		"""
		if self.catalog.has_audio():
			ffmpeg.check_encoder(self.catalog.audio_files())
		tokens = sampler.WeightedSampler(self.catalog, seed=self.seed).generate()
		sampler.log_selection_report(self.catalog, tokens)
		if not utils.is_quiet_mode():
			print("dry run: validation complete")
		return tokens
