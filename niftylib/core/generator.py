#!/usr/bin/env python3

import asyncio
import os
import time
from dataclasses import dataclass, field
from typing import List
from tqdm import tqdm
from niftylib.core import metadata
from niftylib.core import sampler
from niftylib.core import utils
from niftylib.core.caches import Caches
from niftylib.core.catalog import Catalog
from niftylib.core.compositor import LayerCompositor
from niftylib.core.errors import PersistenceError
from niftylib.media import ffmpeg
import PIL.Image

#============================================

@dataclass
class GenerationSummary:
	produced: List[int] = field(default_factory=list)
	skipped: List[int] = field(default_factory=list)
	failed: List[int] = field(default_factory=list)
	videos: List[int] = field(default_factory=list)
	elapsed: str = ''

#============================================

class CollectionGenerator():
	def __init__(self, catalog: Catalog, media_dir: str, metadata_dir: str,
		seed: int = None, synthesizer=None):
		self.catalog = catalog
		self.media_dir = media_dir
		self.metadata_dir = metadata_dir
		self.caches = Caches()
		self.sampler = sampler.WeightedSampler(catalog, seed=seed)
		self.compositor = LayerCompositor(self.caches,
			default_background=catalog.background_color)
		if synthesizer is None:
			synthesizer = ffmpeg.VideoSynthesizer(self.caches.audio)
		self.synthesizer = synthesizer

	#============================
	def run(self) -> GenerationSummary:
		return asyncio.run(self.generate())

	#============================
	def validate(self) -> None:
		if self.catalog.has_audio():
			ffmpeg.check_encoder(self.catalog.audio_files())

	#============================
	async def generate(self) -> GenerationSummary:
		logger = utils.get_logger()
		self.validate()
		tokens = self.sampler.generate(self.catalog.supply)
		logger.info("starting nifty generation...")
		t0 = time.time()
		summary = GenerationSummary()
		hide_progress = utils.is_quiet_mode() or len(tokens) == 0
		with tqdm(total=len(tokens), desc="Generating", disable=hide_progress) as progress:
			for index, selections in enumerate(tokens):
				token_id = index + self.catalog.start_token
				try:
					produced = await self.generate_token(token_id, selections, summary)
				except PersistenceError as error:
					logger.error(str(error))
					summary.failed.append(token_id)
					continue
				finally:
					progress.update(1)
				if produced:
					summary.produced.append(token_id)
				else:
					summary.skipped.append(token_id)
		summary.elapsed = utils.elapsed_since(t0)
		sampler.log_selection_report(self.catalog, tokens)
		logger.info(
			f"generation completed in {summary.elapsed}: {len(summary.produced)} "
			f"produced, {len(summary.skipped)} skipped, {len(summary.failed)} failed"
		)
		return summary

	#============================
	async def generate_token(self, token_id: int, selections: list,
		summary: GenerationSummary = None) -> bool:
		logger = utils.get_logger()
		logger.info(f"generating nifty #{token_id}")
		result = self.compositor.compose(token_id, selections)
		if result.image is None:
			logger.debug(f"token {token_id} has no image layers, nothing to save")
			return False
		image_path = self.save_image(token_id, result.image)
		video_path = None
		if result.audio is not None:
			video_path = await self.synthesizer.synthesize(image_path, result.audio)
			if summary is not None:
				summary.videos.append(token_id)
		animation_url = None
		if video_path is not None:
			animation_url = metadata.media_url(self.media_dir, video_path)
		record = metadata.build_metadata(
			token_id,
			self.catalog.name,
			self.catalog.description,
			metadata.media_url(self.media_dir, image_path),
			metadata.attribute_entries(selections),
			external_url_template=self.catalog.external_url,
			background_color=result.background_color,
			animation_url=animation_url,
		)
		metadata.write_metadata(self.metadata_dir, token_id, record)
		return True

	#============================
	def save_image(self, token_id: int, image: PIL.Image.Image) -> str:
		image_path = os.path.join(self.media_dir, f"{token_id}.png")
		utils.get_logger().debug(f"saving token {token_id} media as '{image_path}'")
		try:
			image.save(image_path, "PNG")
		except (OSError, ValueError) as error:
			raise PersistenceError(f"error saving {image_path}: {error}") from error
		return image_path
