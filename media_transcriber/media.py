from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from media_transcriber.errors import UnsupportedFormatError

AUDIO_EXTENSIONS = [".mp3", ".wav", ".m4a", ".mpga", ".mpeg", ".mp4", ".webm"]
VIDEO_EXTENSIONS = [".mp4", ".mov", ".avi", ".mkv", ".webm", ".flv", ".wmv"]
SUPPORTED_EXTENSIONS = AUDIO_EXTENSIONS + [ext for ext in VIDEO_EXTENSIONS if ext not in AUDIO_EXTENSIONS]


class MediaType(str, Enum):
    AUDIO = "audio"
    VIDEO = "video"


@dataclass(frozen=True)
class MediaDescriptor:
    path: Path
    media_type: MediaType
    extension: str

    @property
    def is_video(self) -> bool:
        return self.media_type is MediaType.VIDEO


def classify(path: Path | str) -> MediaDescriptor:
    """
    Classify a media file by its extension.

    Audio extensions are checked first, so containers that appear in both
    lists (.mp4, .webm) are treated as audio.

    Raises:
        UnsupportedFormatError: if the extension is in neither list.
    """
    path = Path(path)
    extension = path.suffix.lower()

    if extension in AUDIO_EXTENSIONS:
        return MediaDescriptor(path, MediaType.AUDIO, extension)
    if extension in VIDEO_EXTENSIONS:
        return MediaDescriptor(path, MediaType.VIDEO, extension)

    raise UnsupportedFormatError(extension, SUPPORTED_EXTENSIONS)


def format_megabytes(size_bytes: int) -> str:
    return f"{size_bytes / (1024 * 1024):.2f} MB"
