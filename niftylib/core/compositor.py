#!/usr/bin/env python3

from dataclasses import dataclass
from typing import Optional
from niftylib.core import utils
from niftylib.core.caches import Caches
from niftylib.core.catalog import AUDIO, COLOR, IMAGE, NONE, TEXT
from niftylib.core.catalog import AttributeOption, Color
from niftylib.core.errors import ResourceError
import PIL.Image
import PIL.ImageDraw

EMPTY = 'empty'
HAS_IMAGE = 'has_image'

#============================================

class RenderAccumulator():
	"""
	Per-token compositing state.

	The raster only exists once the state is HAS_IMAGE. Background color
	and audio are side channels that never touch the raster directly.
	"""
	def __init__(self):
		self.state = EMPTY
		self.image = None
		self.background_color = None
		self.audio = None

	#============================
	def set_image(self, image: PIL.Image.Image) -> None:
		self.image = image
		self.state = HAS_IMAGE

#============================================

@dataclass
class RenderResult:
	image: Optional[PIL.Image.Image]
	background_color: Optional[str]
	audio: Optional[str]

#============================================

def anchor_x(canvas_width: int, x: int, text_width: int) -> int:
	"""
	Left edge for text; negative x counts back from the right edge.
	"""
	if x < 0:
		return canvas_width + x - text_width
	return x

#============================================

class LayerCompositor():
	def __init__(self, caches: Caches, default_background: Color = None):
		self.caches = caches
		self.default_background = default_background

	#============================
	def compose(self, token_id: int, selections: list) -> RenderResult:
		logger = utils.get_logger()
		accumulator = RenderAccumulator()
		for layer, selection in enumerate(selections):
			logger.debug(
				f"processing attribute '{selection.attribute.name}' with value of "
				f"'{selection.value}' as layer {layer}"
			)
			self.apply(accumulator, token_id, selection.option)
		return RenderResult(
			image=accumulator.image,
			background_color=self.resolve_background(accumulator.background_color),
			audio=accumulator.audio,
		)

	#============================
	def apply(self, accumulator: RenderAccumulator, token_id: int,
		option: AttributeOption) -> None:
		if option.kind == AUDIO:
			accumulator.audio = option.file
			return
		if option.kind == NONE:
			return
		if option.kind == COLOR:
			if accumulator.background_color is None:
				accumulator.background_color = option.color
			return
		if option.kind == IMAGE:
			self._apply_image(accumulator, option.file)
			return
		if option.kind == TEXT:
			self._apply_text(accumulator, token_id, option)
			return
		raise RuntimeError(f"unsupported option kind {option.kind}")

	#============================
	def resolve_background(self, token_color: Color) -> Optional[str]:
		if token_color is not None:
			return token_color.hex
		if self.default_background is not None:
			return self.default_background.hex
		return None

	#============================
	def _apply_image(self, accumulator: RenderAccumulator, path: str) -> None:
		layer_image = self.caches.image.get(path)
		if accumulator.state == EMPTY:
			if accumulator.background_color is None:
				accumulator.set_image(layer_image.copy())
				return
			width, height = layer_image.size
			swatch = self.caches.color.get_color(accumulator.background_color,
				width, height)
			accumulator.set_image(PIL.Image.alpha_composite(swatch, layer_image))
			return
		if accumulator.image.size != layer_image.size:
			raise ResourceError(
				f"layer {path} is {layer_image.size[0]}x{layer_image.size[1]} but the "
				f"token canvas is {accumulator.image.size[0]}x{accumulator.image.size[1]}"
			)
		accumulator.image.alpha_composite(layer_image)

	#============================
	def _apply_text(self, accumulator: RenderAccumulator, token_id: int,
		option: AttributeOption) -> None:
		if accumulator.state != HAS_IMAGE:
			raise ResourceError(
				"an image is required before text can be written - check that the "
				"text layer is above some other image layer"
			)
		font = self.caches.font.get_sized(option.font, option.height)
		text = utils.expand_template(option.text, token_id)
		text_width = measure_text(font, text)[0]
		x = anchor_x(accumulator.image.size[0], option.x, text_width)
		draw = PIL.ImageDraw.Draw(accumulator.image)
		draw.text((x, option.y), text, font=font, fill=option.color.rgba)

#============================================

def measure_text(font, text: str) -> tuple:
	bbox = font.getbbox(text)
	width = bbox[2] - bbox[0]
	height = bbox[3] - bbox[1]
	return (width, height)
