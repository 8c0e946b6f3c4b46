#!/usr/bin/env python3

# python wrapper for ffprobe

import json
import subprocess
from niftylib.core import utils
from niftylib.core.errors import ResourceError

#===============================
def getMediaInfo(mediafile: str) -> dict:
	cmd = ["ffprobe", "-v", "error", "-show_entries", "format=duration",
		"-of", "json", mediafile]
	utils.log_cmd(cmd)
	try:
		proc = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
	except OSError as error:
		raise ResourceError(f"could not run 'ffprobe': {error}") from error
	if proc.returncode != 0:
		stderr = proc.stderr.decode("utf-8", errors="replace").strip()
		raise ResourceError(f"ffprobe could not read {mediafile}: {stderr}")
	try:
		data = json.loads(proc.stdout)
	except ValueError as error:
		raise ResourceError(f"ffprobe returned invalid json for {mediafile}") from error
	return data

#===============================
def getDuration(mediafile: str) -> float:
	data = getMediaInfo(mediafile)
	duration = data.get('format', {}).get('duration')
	if duration is None:
		raise ResourceError(f"no duration reported for {mediafile}")
	return float(duration)
