#!/usr/bin/env python3

import math
import os
import yaml
import PIL.Image
from niftylib.core import utils
from niftylib.core.catalog import AUDIO, COLOR, IMAGE, NONE, TEXT
from niftylib.core.catalog import Attribute, AttributeOption, Catalog, Color
from niftylib.core.errors import ConfigurationError

SUPPORTED_AUDIO_EXTENSIONS = ('aac', 'flac', 'm4a', 'mp3', 'wav')
TEXT_KEYS = ('font', 'text', 'height')
MAX_CATALOG_BYTES = 10 ** 7

#============================================

def supported_image_extensions() -> tuple:
	PIL.Image.init()
	extensions = set()
	for extension in PIL.Image.registered_extensions():
		extensions.add(extension.lower().lstrip('.'))
	return tuple(sorted(extensions))

#============================================

class CatalogLoader():
	def __init__(self, catalog_file: str, source_dir: str = None,
		strict_weights: bool = False):
		self.catalog_file = catalog_file
		if source_dir is None:
			source_dir = os.path.dirname(os.path.abspath(catalog_file))
		self.source_dir = os.path.abspath(source_dir)
		self.strict_weights = strict_weights
		self._image_extensions = None

	#============================
	def load(self) -> Catalog:
		logger = utils.get_logger()
		logger.debug(f"loading catalog from '{self.catalog_file}'")
		data = self._load_yaml()
		return self.parse(data)

	#============================
	def parse(self, data: dict) -> Catalog:
		self._validate_required_keys(data)
		supply = self._parse_int(data.get('supply'), 'supply')
		if supply < 0:
			raise ConfigurationError("supply must not be negative")
		start_token = self._parse_int(data.get('start_token', 0), 'start_token')
		if start_token < 0:
			raise ConfigurationError("start_token must not be negative")
		attributes = self._parse_attributes(data.get('attributes'))
		# first declared attribute is the top layer
		attributes.reverse()
		background_color = None
		if data.get('background_color') is not None:
			background_color = Color.parse(data.get('background_color'))
		catalog = Catalog(
			name=str(data.get('name')),
			description=str(data.get('description')),
			supply=supply,
			attributes=attributes,
			start_token=start_token,
			external_url=data.get('external_url'),
			background_color=background_color,
		)
		utils.get_logger().debug(
			f"catalog has {len(attributes)} attributes and a supply of {supply}"
		)
		return catalog

	#============================
	def _load_yaml(self) -> dict:
		if not os.path.isfile(self.catalog_file):
			raise ConfigurationError(f"catalog file not found: {self.catalog_file}")
		file_size = os.path.getsize(self.catalog_file)
		if file_size > MAX_CATALOG_BYTES:
			raise ConfigurationError("catalog file is larger than 10MB")
		with open(self.catalog_file, 'r') as data_file:
			try:
				data = yaml.safe_load(data_file)
			except yaml.YAMLError as error:
				raise ConfigurationError(
					f"unable to parse catalog {self.catalog_file}: {error}"
				) from error
		if not isinstance(data, dict):
			raise ConfigurationError("catalog must be a mapping at the top level")
		return data

	#============================
	def _validate_required_keys(self, data: dict) -> None:
		required_keys = ('name', 'description', 'supply', 'attributes')
		for key in required_keys:
			if data.get(key) is None:
				raise ConfigurationError(f"missing required key: {key}")

	#============================
	def _parse_int(self, value, key: str) -> int:
		if isinstance(value, bool) or not isinstance(value, int):
			raise ConfigurationError(f"{key} must be an integer")
		return value

	#============================
	def _parse_attributes(self, attributes: list) -> list:
		if not isinstance(attributes, list) or len(attributes) == 0:
			raise ConfigurationError("attributes must be a non-empty list")
		parsed = []
		seen_names = set()
		for attribute_data in attributes:
			attribute = self._parse_attribute(attribute_data)
			if attribute.name in seen_names:
				raise ConfigurationError(f"duplicate attribute name {attribute.name}")
			seen_names.add(attribute.name)
			parsed.append(attribute)
		return parsed

	#============================
	def _parse_attribute(self, attribute_data: dict) -> Attribute:
		if not isinstance(attribute_data, dict):
			raise ConfigurationError("attributes entries must be mappings")
		name = attribute_data.get('name')
		if name is None or str(name) == '':
			raise ConfigurationError("attribute requires a name")
		name = str(name)
		metadata = attribute_data.get('metadata', True)
		if not isinstance(metadata, bool):
			raise ConfigurationError(f"attribute {name} metadata must be true or false")
		directory = self._resolve_directory(name, attribute_data.get('directory'))
		options_data = attribute_data.get('options')
		if not isinstance(options_data, dict) or len(options_data) == 0:
			raise ConfigurationError(f"attribute {name} requires a non-empty options mapping")
		options = {}
		for value, option_data in options_data.items():
			option = self._parse_option(name, str(value), option_data, directory)
			options[str(value)] = option
		return Attribute(name=name, options=options, metadata=metadata)

	#============================
	def _resolve_directory(self, name: str, directory) -> str:
		if directory is None:
			return self.source_dir
		directory_path = os.path.join(self.source_dir, str(directory))
		if not os.path.isdir(directory_path):
			raise ConfigurationError(
				f"could not find '{directory_path}' directory for attribute {name}"
			)
		return directory_path

	#============================
	def _parse_option(self, name: str, value: str, option_data,
		directory: str) -> AttributeOption:
		label = f"{name}.{value}"
		if option_data is None:
			return AttributeOption(kind=NONE)
		if isinstance(option_data, str):
			return self._parse_file_option(label, option_data, 1.0, directory)
		if not isinstance(option_data, dict):
			raise ConfigurationError(f"option {label} must be null, a file name or a mapping")
		weight = self._parse_weight(label, option_data.get('weight', 1.0))
		if any(key in option_data for key in TEXT_KEYS):
			return self._parse_text_option(label, option_data, weight, directory)
		if option_data.get('file') is not None:
			return self._parse_file_option(label, option_data.get('file'), weight,
				directory)
		if option_data.get('color') is not None:
			return AttributeOption(kind=COLOR, weight=weight,
				color=Color.parse(option_data.get('color')))
		unknown = set(option_data.keys()) - {'weight'}
		if len(unknown) > 0:
			raise ConfigurationError(
				f"option {label} has unsupported keys: {', '.join(sorted(unknown))}"
			)
		return AttributeOption(kind=NONE, weight=weight)

	#============================
	def _parse_file_option(self, label: str, file_name: str, weight: float,
		directory: str) -> AttributeOption:
		extension = utils.file_extension(str(file_name))
		if extension == '':
			raise ConfigurationError(f"option {label} file has no extension: {file_name}")
		if extension in SUPPORTED_AUDIO_EXTENSIONS:
			kind = AUDIO
		elif extension in self._supported_image_extensions():
			kind = IMAGE
		else:
			raise ConfigurationError(
				f"option {label} file extension {extension} not supported"
			)
		file_path = self._resolve_file(label, directory, str(file_name))
		return AttributeOption(kind=kind, weight=weight, file=file_path)

	#============================
	def _parse_text_option(self, label: str, option_data: dict, weight: float,
		directory: str) -> AttributeOption:
		for key in TEXT_KEYS:
			if option_data.get(key) is None:
				raise ConfigurationError(f"text option {label} requires {key}")
		height = option_data.get('height')
		if isinstance(height, bool) or not isinstance(height, (int, float)) or height <= 0:
			raise ConfigurationError(f"text option {label} height must be a positive number")
		x = option_data.get('x', 0)
		y = option_data.get('y', 0)
		for coordinate_name, coordinate in (('x', x), ('y', y)):
			if isinstance(coordinate, bool) or not isinstance(coordinate, int):
				raise ConfigurationError(
					f"text option {label} {coordinate_name} must be an integer"
				)
		font_path = self._resolve_file(label, directory, str(option_data.get('font')))
		color = Color.parse(option_data.get('color', '#ffffff'))
		return AttributeOption(kind=TEXT, weight=weight, font=font_path,
			text=str(option_data.get('text')), height=float(height), x=x, y=y,
			color=color)

	#============================
	def _parse_weight(self, label: str, raw_weight) -> float:
		if isinstance(raw_weight, bool) or not isinstance(raw_weight, (int, float)):
			raise ConfigurationError(f"option {label} weight must be a number")
		weight = float(raw_weight)
		if not math.isfinite(weight) or weight <= 0:
			raise ConfigurationError(f"option {label} weight must be positive and finite")
		if self.strict_weights and weight > 1.0:
			raise ConfigurationError(f"option {label} weight must be within (0, 1]")
		return weight

	#============================
	def _resolve_file(self, label: str, directory: str, file_name: str) -> str:
		file_path = os.path.abspath(os.path.join(directory, file_name))
		utils.get_logger().debug(f"checking '{file_path}' file exists...")
		if not os.path.isfile(file_path):
			raise ConfigurationError(
				f"could not find '{file_path}' file for option {label}"
			)
		return file_path

	#============================
	def _supported_image_extensions(self) -> tuple:
		if self._image_extensions is None:
			self._image_extensions = supported_image_extensions()
		return self._image_extensions
