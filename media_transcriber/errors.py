"""
Error taxonomy for the transcription pipeline.

Fatal errors abort a run after its temporary files are removed. The two
non-fatal kinds, `TranscriptionChunkError` and `CleanupError`, are logged
and never stop a run.
"""

from pathlib import Path


class TranscriberError(Exception):
    """Base class for every error raised by the transcriber."""


class ConfigurationError(TranscriberError):
    """The run cannot start because its inputs or environment are invalid."""


class InputNotFoundError(ConfigurationError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Media file not found at: {path}")


class EmptyInputError(ConfigurationError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Media file exists but is empty (0 bytes): {path}")


class InvalidChunkDurationError(ConfigurationError):
    def __init__(self, value: float, ceiling: float):
        self.value = value
        self.ceiling = ceiling
        super().__init__(
            f"Chunk duration must be greater than 0 and below {ceiling} seconds, got {value}"
        )


class MediaProcessorUnavailableError(ConfigurationError):
    def __init__(self, tool: str):
        self.tool = tool
        super().__init__(f"{tool} not found. Please install ffmpeg and make sure it is on your PATH.")


class UnsupportedFormatError(TranscriberError):
    def __init__(self, extension: str, supported: list[str]):
        self.extension = extension
        self.supported = supported
        super().__init__(
            f"Unsupported file format: {extension or '(none)'}. Supported formats: {', '.join(supported)}"
        )


class MediaProcessorError(TranscriberError):
    """An ffmpeg or ffprobe invocation failed."""

    def __init__(self, message: str, stderr: str = ""):
        self.stderr = stderr
        super().__init__(message)


class ExtractionError(TranscriberError):
    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not extract audio from {path}: {reason}")


class ProbeError(TranscriberError):
    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not determine duration of {path}: {reason}")


class PlanningError(TranscriberError):
    pass


class CutError(TranscriberError):
    def __init__(self, segment_index: int, reason: str):
        self.segment_index = segment_index
        self.reason = reason
        super().__init__(f"Could not cut chunk {segment_index}: {reason}")


class TranscriptionChunkError(TranscriberError):
    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not transcribe {path}: {reason}")


class OutputWriteError(TranscriberError):
    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not save transcription to {path}: {reason}")


class CleanupError(TranscriberError):
    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not remove temporary path {path}: {reason}")
