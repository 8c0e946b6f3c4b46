#!/usr/bin/env python3

import math
import numpy
from niftylib.core import utils
from niftylib.core.catalog import Attribute, Catalog, Selection
from niftylib.core.errors import ConfigurationError

#============================================

class WeightedSampler():
	"""
	Draws one option per attribute per token.

	Each attribute is sampled on its own from the categorical
	distribution given by its option weights, so the cost stays linear
	in supply times attribute count no matter how many combinations the
	catalog could produce.
	"""
	def __init__(self, catalog: Catalog, seed: int = None):
		self.catalog = catalog
		self.rng = numpy.random.default_rng(seed)

	#============================
	def generate(self, supply: int = None) -> list:
		if supply is None:
			supply = self.catalog.supply
		if supply < 0:
			raise ConfigurationError("supply must not be negative")
		logger = utils.get_logger()
		logger.debug(
			f"sampling {supply:,} tokens from {len(self.catalog.attributes)} attributes"
		)
		columns = []
		for attribute in self.catalog.attributes:
			columns.append(self.sample_attribute(attribute, supply))
		tokens = []
		for index in range(supply):
			tokens.append([column[index] for column in columns])
		return tokens

	#============================
	def sample_attribute(self, attribute: Attribute, supply: int) -> list:
		values = list(attribute.options.keys())
		probabilities = self._probabilities(attribute)
		indexes = self.rng.choice(len(values), size=supply, p=probabilities)
		column = []
		for index in indexes:
			value = values[int(index)]
			column.append(Selection(attribute, value, attribute.options[value]))
		return column

	#============================
	def _probabilities(self, attribute: Attribute) -> numpy.ndarray:
		if len(attribute.options) == 0:
			raise ConfigurationError(f"attribute {attribute.name} has no options")
		weights = numpy.array(
			[option.weight for option in attribute.options.values()],
			dtype=numpy.float64
		)
		if numpy.any(weights < 0):
			raise ConfigurationError(f"attribute {attribute.name} has a negative weight")
		largest = float(weights.max())
		if not math.isfinite(largest) or largest <= 0:
			raise ConfigurationError(
				f"attribute {attribute.name} needs a positive finite weight, largest is {largest}"
			)
		# scale to at most 1 first so large finite weights cannot overflow the sum
		scaled = weights / largest
		return scaled / scaled.sum()

#============================================

def selection_report(catalog: Catalog, tokens: list) -> list:
	"""
	Compare configured and observed selection rates.

	Returns one row per option with the attribute name, option value,
	count, expected percentage (weight share) and actual percentage
	(count share of all tokens).
	"""
	supply = len(tokens)
	rows = []
	for column_index, attribute in enumerate(catalog.attributes):
		counts = dict.fromkeys(attribute.options.keys(), 0)
		for token in tokens:
			counts[token[column_index].value] += 1
		largest = max(option.weight for option in attribute.options.values())
		scaled_total = 0.0
		if largest > 0:
			scaled_total = sum(option.weight / largest for option in attribute.options.values())
		for value, option in attribute.options.items():
			expected = 0.0
			if scaled_total > 0:
				expected = option.weight / largest / scaled_total * 100.0
			actual = 0.0
			if supply > 0:
				actual = counts[value] / supply * 100.0
			rows.append({
				'attribute': attribute.name,
				'value': value,
				'count': counts[value],
				'expected': expected,
				'actual': actual,
			})
	return rows

#============================================

def log_selection_report(catalog: Catalog, tokens: list) -> None:
	logger = utils.get_logger()
	for row in selection_report(catalog, tokens):
		logger.info(
			f"{row['attribute']} '{row['value']}': expected {row['expected']:.2f}%, "
			f"actual {row['actual']:.2f}% ({row['count']:,} of {len(tokens):,})"
		)
