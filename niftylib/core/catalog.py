#!/usr/bin/env python3

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
import PIL.ImageColor

from niftylib.core.errors import ConfigurationError

AUDIO = 'audio'
COLOR = 'color'
IMAGE = 'image'
TEXT = 'text'
NONE = 'none'

OPTION_KINDS = (AUDIO, COLOR, IMAGE, TEXT, NONE)

#============================================

@dataclass(frozen=True)
class Color:
	hex: str
	rgba: Tuple[int, int, int, int]

	#============================
	@staticmethod
	def parse(value: str) -> "Color":
		"""
		Build a Color from a '#rrggbb' or '#rrggbbaa' string.
		"""
		if not isinstance(value, str):
			raise ConfigurationError(f"color must be a hex string, got {value!r}")
		hex_value = value.strip()
		if not hex_value.startswith('#'):
			hex_value = '#' + hex_value
		try:
			rgba = PIL.ImageColor.getcolor(hex_value, "RGBA")
		except ValueError as error:
			raise ConfigurationError(f"invalid color {value!r}") from error
		return Color(hex=hex_value.lower(), rgba=tuple(rgba))

#============================================

@dataclass(frozen=True)
class AttributeOption:
	"""
	One weighted choice for an attribute.

	The kind field selects which of the remaining fields are meaningful:
	audio and image use file, color uses color, text uses font, text,
	height, x, y and color, none uses only weight.
	"""
	kind: str
	weight: float = 1.0
	file: Optional[str] = None
	color: Optional[Color] = None
	font: Optional[str] = None
	text: Optional[str] = None
	height: Optional[float] = None
	x: int = 0
	y: int = 0

	#============================
	def __post_init__(self):
		if self.kind not in OPTION_KINDS:
			raise ConfigurationError(f"unknown option kind {self.kind}")

#============================================

@dataclass(frozen=True)
class Attribute:
	name: str
	options: Dict[str, AttributeOption]
	metadata: bool = True

	#============================
	def has_kind(self, kind: str) -> bool:
		return any(option.kind == kind for option in self.options.values())

#============================================

@dataclass(frozen=True)
class Selection:
	attribute: Attribute
	value: str
	option: AttributeOption

#============================================

@dataclass(frozen=True)
class Catalog:
	name: str
	description: str
	supply: int
	attributes: List[Attribute]
	start_token: int = 0
	external_url: Optional[str] = None
	background_color: Optional[Color] = None

	#============================
	def has_audio(self) -> bool:
		return any(attribute.has_kind(AUDIO) for attribute in self.attributes)

	#============================
	def audio_files(self) -> List[str]:
		files = []
		for attribute in self.attributes:
			for option in attribute.options.values():
				if option.kind == AUDIO:
					files.append(option.file)
		return files
