#!/usr/bin/env python3

import io
from niftylib.core import utils
from niftylib.core.catalog import Color
from niftylib.core.errors import ResourceError
from niftylib.media import ffprobe
import PIL.Image
import PIL.ImageFont

#============================================

class ImageCache():
	"""Decoded RGBA rasters keyed by resolved path. Callers copy before drawing."""
	def __init__(self):
		self._images = {}

	#============================
	def get(self, path: str) -> PIL.Image.Image:
		if path not in self._images:
			utils.get_logger().debug(f"caching '{path}' for next use...")
			try:
				with PIL.Image.open(path) as image:
					decoded = image.convert("RGBA")
			except (OSError, ValueError) as error:
				raise ResourceError(f"unable to open {path}: {error}") from error
			self._images[path] = decoded
		return self._images[path]

	#============================
	def __len__(self) -> int:
		return len(self._images)

#============================================

class FontCache():
	def __init__(self):
		self._data = {}
		self._sized = {}

	#============================
	def get(self, path: str) -> bytes:
		if path not in self._data:
			utils.get_logger().debug(f"caching font '{path}' for next use...")
			try:
				with open(path, 'rb') as font_file:
					data = font_file.read()
				PIL.ImageFont.truetype(io.BytesIO(data), 12)
			except OSError as error:
				raise ResourceError(f"unable to create font from {path}: {error}") from error
			self._data[path] = data
		return self._data[path]

	#============================
	def get_sized(self, path: str, height: float) -> PIL.ImageFont.FreeTypeFont:
		size = max(1, int(round(height)))
		key = (path, size)
		if key not in self._sized:
			data = self.get(path)
			self._sized[key] = PIL.ImageFont.truetype(io.BytesIO(data), size)
		return self._sized[key]

	#============================
	def __len__(self) -> int:
		return len(self._data)

#============================================

class ColorCache():
	def __init__(self):
		self._swatches = {}

	#============================
	def get_color(self, color: Color, width: int, height: int) -> PIL.Image.Image:
		key = f"{color.hex} {width}x{height}"
		if key not in self._swatches:
			utils.get_logger().debug(f"caching '{key}' for next use...")
			self._swatches[key] = PIL.Image.new("RGBA", (width, height), color.rgba)
		return self._swatches[key]

	#============================
	def __len__(self) -> int:
		return len(self._swatches)

#============================================

class AudioCache():
	"""Exact audio durations in seconds, probed once per file."""
	def __init__(self):
		self._durations = {}

	#============================
	def get(self, path: str) -> float:
		if path not in self._durations:
			self._durations[path] = ffprobe.getDuration(path)
		return self._durations[path]

	#============================
	def __len__(self) -> int:
		return len(self._durations)

#============================================

class Caches():
	def __init__(self):
		self.audio = AudioCache()
		self.color = ColorCache()
		self.font = FontCache()
		self.image = ImageCache()
