"""
Font discovery helpers for text layer tests.
"""

# Standard Library
import os

#============================================

FONT_CANDIDATES = [
	"/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
	"/usr/share/fonts/dejavu/DejaVuSans.ttf",
	"/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
	"/usr/share/fonts/truetype/freefont/FreeSans.ttf",
	"/usr/local/share/fonts/DejaVuSans.ttf",
	"/Library/Fonts/Arial.ttf",
	"/System/Library/Fonts/Supplemental/Arial.ttf",
]

FONT_SEARCH_DIRS = [
	"/usr/share/fonts",
	"/usr/local/share/fonts",
	"/Library/Fonts",
	"/System/Library/Fonts",
]

#============================================

def find_system_ttf() -> str:
	"""
	Return a TTF/OTF font path usable by the text layer, or None.
	"""
	for path in FONT_CANDIDATES:
		if os.path.isfile(path):
			return path
	for base in FONT_SEARCH_DIRS:
		if not os.path.isdir(base):
			continue
		for root, dirs, files in os.walk(base):
			dirs[:] = sorted(dirs)
			for name in sorted(files):
				if name.lower().endswith((".ttf", ".otf")):
					return os.path.join(root, name)
	return None
