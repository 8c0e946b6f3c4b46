#!/usr/bin/env python3

import asyncio
import os
import shutil
import time
from niftylib.core import utils
from niftylib.core.caches import AudioCache
from niftylib.core.errors import EncodingError, ResourceError

ENCODER = "ffmpeg"
PROBE = "ffprobe"
# container whose duration must be probed so the looped frame stops on time
PROBED_AUDIO_EXTENSIONS = ('m4a',)

#============================================

def video_path_for(image_path: str) -> str:
	return os.path.splitext(image_path)[0] + ".mp4"

#============================================

def needs_probe(audio_path: str) -> bool:
	return utils.file_extension(audio_path) in PROBED_AUDIO_EXTENSIONS

#============================================

def check_encoder(audio_files: list = None) -> None:
	"""
	Confirm the encoder (and the prober when needed) is on the PATH.
	"""
	required = [ENCODER]
	if audio_files is not None and any(needs_probe(path) for path in audio_files):
		required.append(PROBE)
	for tool in required:
		utils.get_logger().debug(f"checking for {tool}...")
		if shutil.which(tool) is None:
			raise ResourceError(f"'{tool}' was not found - check your PATH")

#============================================

def build_video_cmd(image_path: str, audio_path: str, video_path: str,
	duration_ms: int = None) -> list:
	cmd = [ENCODER, "-y", "-nostdin"]
	cmd += ["-loop", "1"]
	# single still image, one frame per second is enough
	cmd += ["-framerate", "1", "-colorspace", "bt709"]
	cmd += ["-i", image_path]
	cmd += ["-i", audio_path]
	cmd += ["-acodec", "aac", "-vcodec", "libx264", "-pix_fmt", "yuv420p"]
	if duration_ms is not None:
		cmd += ["-t", f"{duration_ms}ms"]
	else:
		cmd += ["-shortest"]
	cmd += [video_path]
	return cmd

#============================================

class VideoSynthesizer():
	def __init__(self, audio_cache: AudioCache = None):
		if audio_cache is None:
			audio_cache = AudioCache()
		self.audio_cache = audio_cache

	#============================
	def audio_duration_ms(self, audio_path: str):
		if not needs_probe(audio_path):
			return None
		utils.get_logger().debug("determining audio track duration for precise output...")
		duration = self.audio_cache.get(audio_path)
		return int(duration * 1000)

	#============================
	async def synthesize(self, image_path: str, audio_path: str) -> str:
		logger = utils.get_logger()
		video_path = video_path_for(image_path)
		duration_ms = self.audio_duration_ms(audio_path)
		cmd = build_video_cmd(image_path, audio_path, video_path, duration_ms)
		utils.log_cmd(cmd)
		t0 = time.time()
		try:
			proc = await asyncio.create_subprocess_exec(*cmd,
				stdin=asyncio.subprocess.DEVNULL,
				stdout=asyncio.subprocess.DEVNULL,
				stderr=asyncio.subprocess.PIPE)
		except OSError as error:
			raise EncodingError(f"could not run '{ENCODER}': {error}") from error
		_, stderr = await proc.communicate()
		if proc.returncode != 0:
			message = stderr.decode("utf-8", errors="replace").strip().splitlines()
			tail = message[-1] if len(message) > 0 else "no output"
			raise EncodingError(
				f"could not generate {video_path}: {ENCODER} exited with "
				f"{proc.returncode} ({tail})"
			)
		logger.debug(f"successfully generated {video_path} in {utils.elapsed_since(t0)}")
		return video_path
