"""
Catalog and raster builders shared by the generation tests.
"""

# Standard Library
import os

# PIP3 modules
import PIL.Image

# local repo modules
from niftylib.core.catalog import AUDIO, COLOR, IMAGE, NONE, TEXT
from niftylib.core.catalog import Attribute, AttributeOption, Catalog, Color

#============================================

def write_layer(path: str, size: tuple = (32, 32), box: tuple = (8, 8, 24, 24),
	fill: tuple = (0, 0, 0, 255)) -> str:
	"""
	Write a transparent RGBA png with one opaque rectangle.
	"""
	image = PIL.Image.new("RGBA", size, (0, 0, 0, 0))
	image.paste(fill, box)
	image.save(path, "PNG")
	return path

#============================================

def image_option(path: str, weight: float = 1.0) -> AttributeOption:
	return AttributeOption(kind=IMAGE, weight=weight, file=os.path.abspath(path))

#============================================

def color_option(value: str, weight: float = 1.0) -> AttributeOption:
	return AttributeOption(kind=COLOR, weight=weight, color=Color.parse(value))

#============================================

def audio_option(path: str, weight: float = 1.0) -> AttributeOption:
	return AttributeOption(kind=AUDIO, weight=weight, file=path)

#============================================

def none_option(weight: float = 1.0) -> AttributeOption:
	return AttributeOption(kind=NONE, weight=weight)

#============================================

def text_option(font: str, text: str, height: float = 12, x: int = 0,
	y: int = 0, color: str = "#ffffff") -> AttributeOption:
	return AttributeOption(kind=TEXT, font=font, text=text, height=height,
		x=x, y=y, color=Color.parse(color))

#============================================

def make_catalog(attributes: list, supply: int = 2, start_token: int = 1,
	background_color: str = None, external_url: str = None) -> Catalog:
	color = None
	if background_color is not None:
		color = Color.parse(background_color)
	return Catalog(
		name="Nifty #{id}",
		description="A test collection",
		supply=supply,
		attributes=attributes,
		start_token=start_token,
		external_url=external_url,
		background_color=color,
	)

#============================================

def make_attribute(name: str, options: dict, metadata: bool = True) -> Attribute:
	return Attribute(name=name, options=options, metadata=metadata)
