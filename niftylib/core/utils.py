#!/usr/bin/env python3

import logging
import os
import re
import shlex
import sys
import time

LOGGER_NAME = "Nifty"
ID_VARIABLE = "{id}"

_QUIET_MODE = False

#============================================

def setup_logging(level: str = "INFO", logger_name: str = LOGGER_NAME) -> logging.Logger:
	"""
	Configure and return the application logger.
	Calling it again only updates the level.
	"""
	logger = logging.getLogger(logger_name)
	numeric_level = getattr(logging, level.upper(), logging.INFO)
	logger.setLevel(numeric_level)
	if not logger.handlers:
		handler = logging.StreamHandler(sys.stderr)
		formatter = logging.Formatter(
			fmt="%(asctime)s | %(levelname)-7s | %(message)s",
			datefmt="%Y-%m-%d %H:%M:%S"
		)
		handler.setFormatter(formatter)
		logger.addHandler(handler)
		logger.propagate = False
	return logger

#============================================

def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
	return logging.getLogger(name)

#============================================

def level_from_verbosity(verbosity: int) -> str:
	if verbosity <= 0:
		return "WARNING"
	if verbosity == 1:
		return "INFO"
	return "DEBUG"

#============================================

def set_quiet_mode(quiet: bool) -> None:
	global _QUIET_MODE
	_QUIET_MODE = bool(quiet)

#============================================

def is_quiet_mode() -> bool:
	return _QUIET_MODE

#============================================

def format_cmd(args: list) -> str:
	showcmd = " ".join(shlex.quote(str(arg)) for arg in args)
	showcmd = re.sub("  *", " ", showcmd)
	return showcmd

#============================================

def log_cmd(args: list) -> None:
	get_logger().debug(f"CMD: '{format_cmd(args)}'")

#============================================

def expand_template(template: str, token_id: int) -> str:
	"""
	Substitute the token id into a name, url or text template.

	Only the single {id} variable is supported; any other braces are
	left untouched.
	"""
	if template is None:
		return None
	return template.replace(ID_VARIABLE, str(token_id))

#============================================

def file_extension(filepath: str) -> str:
	extension = os.path.splitext(filepath)[1]
	return extension.lower().lstrip('.')

#============================================

def format_elapsed(seconds: float) -> str:
	millis = int(round(seconds * 1000))
	hours, remainder = divmod(millis, 3600 * 1000)
	minutes, remainder = divmod(remainder, 60 * 1000)
	secs, millis = divmod(remainder, 1000)
	return f"{hours:02d}:{minutes:02d}:{secs:02d}.{millis:03d}"

#============================================

def elapsed_since(start_time: float) -> str:
	return format_elapsed(time.time() - start_time)
