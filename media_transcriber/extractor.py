from pathlib import Path
import tempfile

from media_transcriber.cleanup import TempResourceTracker
from media_transcriber.config import CHUNK_EXTENSION
from media_transcriber.errors import ExtractionError, MediaProcessorError
from media_transcriber.ffmpeg import MediaProcessor
from media_transcriber.logger import log_info, log_success


def extract_audio(video_path: Path, processor: MediaProcessor, tracker: TempResourceTracker) -> Path:
    """
    Extract the audio track of a video into a fresh temporary directory.

    The directory and the audio file are registered with the tracker before
    the media processor runs, so a failed extraction leaves nothing behind
    once the tracker cleans up.

    Args:
        video_path: Path to the video file
        processor: Media engine performing the extraction
        tracker: Tracker that owns the temporary directory

    Returns:
        Path to the extracted audio file
    """
    log_info(f"Processing video file: {video_path.name}")
    temp_dir = tracker.track(tempfile.mkdtemp(prefix="extracted-audio-"))
    audio_path = tracker.track(temp_dir / f"extracted-audio.{CHUNK_EXTENSION}")

    try:
        processor.extract_audio(video_path, audio_path)
    except MediaProcessorError as e:
        raise ExtractionError(video_path, str(e)) from e

    if not audio_path.exists():
        raise ExtractionError(video_path, "no audio file was produced")

    log_success(f"Extracted audio from video file: {video_path.name}")
    return audio_path
