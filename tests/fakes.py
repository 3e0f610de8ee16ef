"""Fakes for the media processor and the speech-to-text service."""

from __future__ import annotations

from pathlib import Path

from media_transcriber.errors import MediaProcessorError, TranscriptionChunkError
from media_transcriber.ffmpeg import MediaProcessor
from media_transcriber.speech_to_text import SpeechToText


class FakeMediaProcessor(MediaProcessor):
    """Writes small placeholder files instead of running ffmpeg."""

    def __init__(
        self,
        duration: float | None = 3000.0,
        fail_probe: bool = False,
        fail_extract: bool = False,
        fail_cut_at: int | None = None,
    ) -> None:
        self.duration = duration
        self.fail_probe = fail_probe
        self.fail_extract = fail_extract
        self.fail_cut_at = fail_cut_at
        self.probed: list[Path] = []
        self.extracted: list[tuple[Path, Path]] = []
        self.cuts: list[tuple[Path, Path, float, float]] = []

    def check_available(self) -> None:
        pass

    def probe_duration(self, path: Path) -> float:
        self.probed.append(path)
        if self.fail_probe:
            raise MediaProcessorError("ffprobe exited with code 1: Invalid data found", "Invalid data found")
        return self.duration

    def extract_audio(self, video_path: Path, output_path: Path) -> None:
        self.extracted.append((video_path, output_path))
        if self.fail_extract:
            output_path.write_bytes(b"partial")
            raise MediaProcessorError("ffmpeg exited with code 1: no audio stream")
        output_path.write_bytes(b"extracted audio")

    def cut(self, source_path: Path, output_path: Path, start_seconds: float, length_seconds: float) -> None:
        index = len(self.cuts)
        self.cuts.append((source_path, output_path, start_seconds, length_seconds))
        if index == self.fail_cut_at:
            raise MediaProcessorError(f"ffmpeg exited with code 1: cannot cut chunk {index}")
        output_path.write_bytes(b"chunk %d" % index)


class FakeTranscriber(SpeechToText):
    """Returns scripted texts in call order; an exception entry makes that call fail."""

    def __init__(self, responses: list[str | Exception]) -> None:
        self.responses = list(responses)
        self.calls: list[Path] = []

    def transcribe(self, file_path: Path) -> str:
        self.calls.append(file_path)
        response = self.responses[len(self.calls) - 1]
        if isinstance(response, Exception):
            raise TranscriptionChunkError(file_path, str(response))
        return response


