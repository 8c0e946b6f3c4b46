#!/usr/bin/env python3

#============================================

class NiftyError(RuntimeError):
	"""Base class for all generation failures."""

#============================================

class ConfigurationError(NiftyError):
	"""Catalog is malformed or cannot be sampled."""

#============================================

class ResourceError(NiftyError):
	"""A referenced file or tool could not be used."""

#============================================

class PersistenceError(NiftyError):
	"""An artifact could not be written. Logged, never fatal."""

#============================================

class EncodingError(NiftyError):
	"""The video encoder failed or could not be started."""

#============================================

class OutputDirectoryError(NiftyError):
	pass

#============================================

class DeploymentError(NiftyError):
	pass
