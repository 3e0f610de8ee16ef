"""
Orchestrates a long-form transcription run.

A run moves through these stages in order:

1.  Validating: the input must exist and be non-empty, and the media
    engine must be installed.
2.  Classifying: the extension decides whether the input is audio or video.
3.  Extracting audio (video only): the audio track is written to a temp file.
4.  Probing: the total duration is read from the audio.
5.  Planning: the duration is split into contiguous segments no longer than
    the max chunk duration.
6.  Cutting: every segment is cut to its own chunk file, one at a time.
7.  Transcribing: every chunk is sent to the speech-to-text service, one at
    a time. A failed chunk is logged and skipped.
8.  Joining: the successful chunk texts are joined, in index order, with a
    blank line between them.
9.  Writing: the transcript is written to the output path.
10. Cleaning up: every temporary file and directory is removed. This
    happens on every exit path, before a failure is reported.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
import tempfile

from media_transcriber.cleanup import TempResourceTracker
from media_transcriber.config import DEFAULT_CHUNK_DURATION_SECONDS, validate_chunk_duration
from media_transcriber.cutter import ChunkArtifact, cut_segment
from media_transcriber.errors import (
    CleanupError,
    EmptyInputError,
    InputNotFoundError,
    OutputWriteError,
    TranscriptionChunkError,
)
from media_transcriber.extractor import extract_audio
from media_transcriber.ffmpeg import MediaProcessor
from media_transcriber.logger import log_error, log_info, log_success, log_warning
from media_transcriber.media import SUPPORTED_EXTENSIONS, MediaDescriptor, classify, format_megabytes
from media_transcriber.prober import probe_duration
from media_transcriber.segments import SegmentDescriptor, plan_segments
from media_transcriber.speech_to_text import SpeechToText

PART_SEPARATOR = "\n\n"


class RunStage(str, Enum):
    CREATED = "created"
    VALIDATING = "validating"
    CLASSIFYING = "classifying"
    EXTRACTING_AUDIO = "extracting_audio"
    PROBING = "probing"
    PLANNING = "planning"
    CUTTING = "cutting"
    TRANSCRIBING = "transcribing"
    JOINING = "joining"
    WRITING = "writing"
    CLEANING_UP = "cleaning_up"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class TranscriptPart:
    segment_index: int
    text: str | None = None
    failure_reason: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.failure_reason is None


@dataclass
class TranscriptionRun:
    """
    State of one transcription job.

    Entering the run as a context manager scopes its temporary resources:
    leaving the block always moves the run to the cleaning-up stage and
    removes everything the tracker holds.
    """
    input_path: Path
    output_path: Path
    max_chunk_duration: float
    tracker: TempResourceTracker = field(default_factory=TempResourceTracker)
    stage: RunStage = RunStage.CREATED
    failed_stage: RunStage | None = None
    descriptor: MediaDescriptor | None = None
    audio_path: Path | None = None
    duration: float | None = None
    plan: list[SegmentDescriptor] = field(default_factory=list)
    artifacts: list[ChunkArtifact] = field(default_factory=list)
    parts: list[TranscriptPart] = field(default_factory=list)
    cleanup_errors: list[CleanupError] = field(default_factory=list)
    text: str | None = None

    @property
    def failed_parts(self) -> list[TranscriptPart]:
        return [part for part in self.parts if not part.succeeded]

    def enter(self, stage: RunStage) -> None:
        self.stage = stage

    def __enter__(self) -> "TranscriptionRun":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.failed_stage = self.stage
        self.enter(RunStage.CLEANING_UP)
        self.cleanup_errors = self.tracker.cleanup_all()


def validate_input(path: Path) -> None:
    """Ensure the input media file exists and is not empty."""
    log_info(f"Looking for media file at: {path}")
    if not path.is_file():
        raise InputNotFoundError(path)

    size = path.stat().st_size
    if size == 0:
        raise EmptyInputError(path)
    log_info(f"Found media file: {path.name} ({format_megabytes(size)})")


def join_transcript(parts: list[TranscriptPart]) -> str:
    """Join the text of every successful part in ascending index order."""
    ordered = sorted(parts, key=lambda part: part.segment_index)
    return PART_SEPARATOR.join(part.text for part in ordered if part.succeeded and part.text is not None)


def save_transcription(transcription_text: str, output_path: Path) -> None:
    """Saves the transcription text to the specified file path, replacing any previous content."""
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding='utf-8') as text_file:
            text_file.write(transcription_text)
    except OSError as e:
        raise OutputWriteError(output_path, str(e)) from e
    log_success(f"Full transcription saved to {output_path}")


def report_failure(run: TranscriptionRun, error: Exception) -> None:
    """Log a fatal error together with details about the input and remediation hints."""
    path = run.input_path
    try:
        size = format_megabytes(path.stat().st_size)
    except OSError:
        size = "unknown"

    stage = run.failed_stage or run.stage
    log_error(f"Error during transcription ({stage.value} failed): {error}")
    log_error("File information:")
    log_error(f"- Path: {path}")
    log_error(f"- Size: {size}")
    log_error(f"- Extension: {path.suffix or '(none)'}")
    log_error("Possible solutions:")
    log_error(f"1. Ensure the media file is in a supported format ({', '.join(ext.lstrip('.') for ext in SUPPORTED_EXTENSIONS)})")
    log_error("2. Check if the file is not corrupted by playing it in a media player")
    log_error("3. Verify that your OpenAI API key is set and has access to the transcription model")


class TranscriptionPipeline:
    """
    Runs the probe, segment, transcribe, concatenate and cleanup pipeline.

    Every call to the media processor and the speech-to-text service is
    awaited before the next one starts, so at most one external process or
    request is in flight and chunk order never needs to be reconstructed.
    """

    def __init__(
        self,
        processor: MediaProcessor,
        transcriber: SpeechToText,
        max_chunk_duration: float = DEFAULT_CHUNK_DURATION_SECONDS,
    ):
        self.processor = processor
        self.transcriber = transcriber
        self.max_chunk_duration = validate_chunk_duration(max_chunk_duration)

    def run(self, input_path: Path | str, output_path: Path | str, max_chunk_duration: float | None = None) -> str:
        """
        Transcribe a media file and write the transcript to output_path.

        Args:
            input_path: Path to the audio or video file
            output_path: Path of the text file to write
            max_chunk_duration: Overrides the pipeline's chunk duration for this run

        Returns:
            The joined transcript text

        Raises:
            TranscriberError: on any fatal pipeline error. Every fatal error,
                including unexpected OS errors, is reported and re-raised after
                temporary files are removed.
        """
        if max_chunk_duration is None:
            max_chunk_duration = self.max_chunk_duration
        run = TranscriptionRun(
            input_path=Path(input_path).resolve(),
            output_path=Path(output_path).resolve(),
            max_chunk_duration=validate_chunk_duration(max_chunk_duration),
        )

        try:
            with run:
                self._execute(run)
        except Exception as error:
            run.enter(RunStage.FAILED)
            report_failure(run, error)
            raise

        run.enter(RunStage.DONE)
        return run.text

    def _execute(self, run: TranscriptionRun) -> None:
        run.enter(RunStage.VALIDATING)
        validate_input(run.input_path)
        self.processor.check_available()

        run.enter(RunStage.CLASSIFYING)
        run.descriptor = classify(run.input_path)

        run.audio_path = run.input_path
        if run.descriptor.is_video:
            run.enter(RunStage.EXTRACTING_AUDIO)
            run.audio_path = extract_audio(run.input_path, self.processor, run.tracker)

        run.enter(RunStage.PROBING)
        run.duration = probe_duration(run.audio_path, self.processor)

        run.enter(RunStage.PLANNING)
        run.plan = plan_segments(run.duration, run.max_chunk_duration)
        log_info(
            f"Splitting {run.audio_path.name} ({format_megabytes(run.audio_path.stat().st_size)}, "
            f"{int(run.duration // 60)} minutes) into {len(run.plan)} chunks of max "
            f"{int(run.max_chunk_duration // 60)} minutes each..."
        )

        run.enter(RunStage.CUTTING)
        chunks_dir = run.tracker.track(tempfile.mkdtemp(prefix="media-chunks-"))
        for segment in run.plan:
            run.artifacts.append(
                cut_segment(run.audio_path, segment, chunks_dir, self.processor, run.tracker, len(run.plan))
            )
        log_success(f"Split audio into {len(run.artifacts)} chunks for processing")

        run.enter(RunStage.TRANSCRIBING)
        for artifact in run.artifacts:
            run.parts.append(self._transcribe_chunk(artifact, len(run.artifacts)))

        run.enter(RunStage.JOINING)
        run.text = join_transcript(run.parts)
        failed = run.failed_parts
        if failed:
            log_warning(
                f"{len(failed)}/{len(run.parts)} chunks failed and are missing from the transcript: "
                f"{', '.join(str(part.segment_index + 1) for part in failed)}"
            )

        run.enter(RunStage.WRITING)
        save_transcription(run.text, run.output_path)

    def _transcribe_chunk(self, artifact: ChunkArtifact, total: int) -> TranscriptPart:
        number = artifact.segment_index + 1
        log_info(f"Transcribing chunk {number}/{total} ({format_megabytes(artifact.size_bytes)})...")
        try:
            text = self.transcriber.transcribe(artifact.file_path)
        except TranscriptionChunkError as e:
            log_error(f"Failed to transcribe chunk {number}: {e.reason}")
            return TranscriptPart(artifact.segment_index, failure_reason=e.reason)

        log_success(f"Successfully transcribed chunk {number}/{total}")
        return TranscriptPart(artifact.segment_index, text=text)
