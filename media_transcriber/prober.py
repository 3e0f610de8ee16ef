import math
from pathlib import Path

from media_transcriber.errors import MediaProcessorError, ProbeError
from media_transcriber.ffmpeg import MediaProcessor
from media_transcriber.logger import log_info


def probe_duration(path: Path, processor: MediaProcessor) -> float:
    """
    Get the duration of a media file in seconds.

    Raises:
        ProbeError: if the file cannot be read or reports no finite, positive duration.
    """
    log_info(f"Analyzing duration of {path.name}...")
    try:
        duration = processor.probe_duration(path)
    except MediaProcessorError as e:
        raise ProbeError(path, str(e)) from e

    if duration is None or not math.isfinite(duration) or duration <= 0:
        raise ProbeError(path, f"file reports a duration of {duration}")
    return duration
