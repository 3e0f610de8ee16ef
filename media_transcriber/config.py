import os
from dataclasses import dataclass

from media_transcriber.errors import InvalidChunkDurationError
from media_transcriber.logger import log_error

# Hard ceiling the transcription service enforces per uploaded file (25 minutes)
SERVICE_MAX_DURATION_SECONDS = 1500
# Chunks stay safely below the ceiling
DEFAULT_CHUNK_DURATION_SECONDS = 1400
DEFAULT_TRANSCRIBE_MODEL = "gpt-4o-transcribe"
TRANSCRIPT_RESPONSE_FORMAT = "text"
CHUNK_EXTENSION = "mp3"


@dataclass(frozen=True)
class Settings:
    """Run settings resolved from the environment and command-line flags."""
    max_chunk_duration: float = DEFAULT_CHUNK_DURATION_SECONDS
    transcribe_model: str = DEFAULT_TRANSCRIBE_MODEL


def validate_chunk_duration(value: float) -> float:
    """Reject chunk durations that are non-positive or reach the service ceiling."""
    if not 0 < value < SERVICE_MAX_DURATION_SECONDS:
        raise InvalidChunkDurationError(value, SERVICE_MAX_DURATION_SECONDS)
    return value


def load_settings(max_chunk_duration: float | None = None, transcribe_model: str | None = None) -> Settings:
    """
    Build the run settings.

    Explicit arguments win over the `MAX_CHUNK_DURATION` and `TRANSCRIBE_MODEL`
    environment variables, which win over the defaults. An unparsable
    `MAX_CHUNK_DURATION` is reported and ignored.
    """
    if max_chunk_duration is None:
        raw_duration = os.environ.get("MAX_CHUNK_DURATION")
        max_chunk_duration = DEFAULT_CHUNK_DURATION_SECONDS
        if raw_duration:
            try:
                max_chunk_duration = float(raw_duration)
            except ValueError:
                log_error(f"Invalid MAX_CHUNK_DURATION: {raw_duration}. Using {DEFAULT_CHUNK_DURATION_SECONDS} seconds.")

    if transcribe_model is None:
        transcribe_model = os.environ.get("TRANSCRIBE_MODEL") or DEFAULT_TRANSCRIBE_MODEL

    return Settings(
        max_chunk_duration=validate_chunk_duration(max_chunk_duration),
        transcribe_model=transcribe_model,
    )
