from abc import ABC, abstractmethod
from pathlib import Path
import subprocess

from media_transcriber.errors import MediaProcessorError, MediaProcessorUnavailableError
from media_transcriber.logger import log_debug


def format_seconds(seconds: float) -> str:
    """Formats a time offset in fixed-point seconds, the form ffmpeg's -ss and -t accept."""
    return f"{seconds:.6f}".rstrip("0").rstrip(".") or "0"


class MediaProcessor(ABC):
    """
    Interface for the external media engine.
    """

    @abstractmethod
    def check_available(self) -> None:
        """
        Verifies the engine can be invoked.

        Raises:
            MediaProcessorUnavailableError: if the engine is not installed.
        """
        pass

    @abstractmethod
    def probe_duration(self, path: Path) -> float:
        """
        Reads the total duration of a media file.

        Args:
            path: Path to the media file

        Returns:
            Duration in seconds
        """
        pass

    @abstractmethod
    def extract_audio(self, video_path: Path, output_path: Path) -> None:
        """
        Writes the audio track of a video container to a standalone audio file.

        Args:
            video_path: Path to the video file
            output_path: Path of the audio file to create
        """
        pass

    @abstractmethod
    def cut(self, source_path: Path, output_path: Path, start_seconds: float, length_seconds: float) -> None:
        """
        Writes the time range [start, start + length) of a media file to a new audio file.

        Args:
            source_path: Path to the media file to cut from
            output_path: Path of the chunk file to create
            start_seconds: Offset of the range in seconds
            length_seconds: Length of the range in seconds
        """
        pass


class FfmpegMediaProcessor(MediaProcessor):
    """
    Implementation of the media engine using the ffmpeg and ffprobe binaries.
    """

    def __init__(self, ffmpeg_binary: str = "ffmpeg", ffprobe_binary: str = "ffprobe"):
        self.ffmpeg_binary = ffmpeg_binary
        self.ffprobe_binary = ffprobe_binary

    def check_available(self) -> None:
        for binary in (self.ffmpeg_binary, self.ffprobe_binary):
            try:
                subprocess.run([binary, '-version'], stdout=subprocess.PIPE, stderr=subprocess.PIPE, check=True)
            except (subprocess.SubprocessError, FileNotFoundError):
                raise MediaProcessorUnavailableError(binary)

    def probe_duration(self, path: Path) -> float:
        cmd = [self.ffprobe_binary, '-v', 'error', '-show_entries', 'format=duration',
               '-of', 'default=noprint_wrappers=1:nokey=1', str(path)]
        output = self._run(cmd)
        try:
            return float(output.strip())
        except ValueError:
            raise MediaProcessorError(f"ffprobe reported no duration (got {output.strip()!r})")

    def extract_audio(self, video_path: Path, output_path: Path) -> None:
        cmd = [
            self.ffmpeg_binary,
            '-i', str(video_path),
            '-vn',
            '-acodec', 'libmp3lame',
            '-ab', '192k',
            '-y',
            str(output_path)
        ]
        self._run(cmd)

    def cut(self, source_path: Path, output_path: Path, start_seconds: float, length_seconds: float) -> None:
        cmd = [
            self.ffmpeg_binary,
            '-ss', format_seconds(start_seconds),
            '-i', str(source_path),
            '-t', format_seconds(length_seconds),
            '-vn',
            '-acodec', 'libmp3lame',
            '-y',  # Overwrite output files without asking
            str(output_path)
        ]
        self._run(cmd)

    def _run(self, cmd: list[str]) -> str:
        """Runs a command to completion and returns its stdout."""
        log_debug(f"Running: {' '.join(cmd)}")
        try:
            result = subprocess.run(cmd, check=True, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True)
        except FileNotFoundError:
            raise MediaProcessorUnavailableError(cmd[0])
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise MediaProcessorError(f"{cmd[0]} exited with code {e.returncode}: {stderr}", stderr) from e
        return result.stdout
