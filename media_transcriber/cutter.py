from dataclasses import dataclass
from pathlib import Path

from media_transcriber.cleanup import TempResourceTracker
from media_transcriber.config import CHUNK_EXTENSION
from media_transcriber.errors import CutError, MediaProcessorError
from media_transcriber.ffmpeg import MediaProcessor
from media_transcriber.logger import log_info
from media_transcriber.media import format_megabytes
from media_transcriber.segments import SegmentDescriptor


@dataclass(frozen=True)
class ChunkArtifact:
    segment_index: int
    file_path: Path
    size_bytes: int


def chunk_filename(index: int) -> str:
    return f"chunk-{index}.{CHUNK_EXTENSION}"


def cut_segment(
    source_path: Path,
    segment: SegmentDescriptor,
    temp_dir: Path,
    processor: MediaProcessor,
    tracker: TempResourceTracker,
    total_chunks: int | None = None,
) -> ChunkArtifact:
    """
    Materialize one segment of the source as its own chunk file.

    The chunk is written to `temp_dir/chunk-<index>.mp3` and tracked before
    the media processor runs, so a partially written file is removed too.

    Raises:
        CutError: if the processor fails or produces no file.
    """
    output_path = tracker.track(temp_dir / chunk_filename(segment.index))

    try:
        processor.cut(source_path, output_path, segment.start_seconds, segment.length_seconds)
    except MediaProcessorError as e:
        raise CutError(segment.index, str(e)) from e

    if not output_path.exists():
        raise CutError(segment.index, f"{output_path} was not created")

    artifact = ChunkArtifact(segment.index, output_path, output_path.stat().st_size)
    total = total_chunks if total_chunks is not None else "?"
    log_info(
        f"Created chunk {segment.index + 1}/{total}: {output_path.name} "
        f"({format_megabytes(artifact.size_bytes)}, {int(segment.length_seconds // 60)} minutes)"
    )
    return artifact
