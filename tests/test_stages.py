"""Tests for the audio extractor, duration prober and chunk cutter."""

from __future__ import annotations

from pathlib import Path

import pytest

from media_transcriber.cleanup import TempResourceTracker
from media_transcriber.cutter import ChunkArtifact, chunk_filename, cut_segment
from media_transcriber.errors import CutError, ExtractionError, MediaProcessorError, ProbeError
from media_transcriber.extractor import extract_audio
from media_transcriber.prober import probe_duration
from media_transcriber.segments import SegmentDescriptor

from tests.fakes import FakeMediaProcessor


class TestExtractAudio:
    def test_writes_into_tracked_temp_dir(self, video_file: Path, temp_root: Path) -> None:
        processor = FakeMediaProcessor()
        tracker = TempResourceTracker()

        audio_path = extract_audio(video_file, processor, tracker)

        assert audio_path.name == "extracted-audio.mp3"
        assert audio_path.parent.parent == temp_root
        assert audio_path.parent.name.startswith("extracted-audio-")
        assert tracker.paths == [audio_path.parent, audio_path]
        assert processor.extracted == [(video_file, audio_path)]

    def test_each_call_gets_fresh_directory(self, video_file: Path, temp_root: Path) -> None:
        processor = FakeMediaProcessor()
        tracker = TempResourceTracker()
        first = extract_audio(video_file, processor, tracker)
        second = extract_audio(video_file, processor, tracker)
        assert first.parent != second.parent

    def test_failure_is_wrapped_and_still_tracked(self, video_file: Path, temp_root: Path) -> None:
        tracker = TempResourceTracker()
        with pytest.raises(ExtractionError) as exc_info:
            extract_audio(video_file, FakeMediaProcessor(fail_extract=True), tracker)

        assert exc_info.value.path == video_file
        assert isinstance(exc_info.value.__cause__, MediaProcessorError)
        tracker.cleanup_all()
        assert list(temp_root.iterdir()) == []


class TestProbeDuration:
    def test_returns_duration(self, audio_file: Path) -> None:
        assert probe_duration(audio_file, FakeMediaProcessor(duration=3000.25)) == 3000.25

    def test_processor_failure_is_probe_error(self, audio_file: Path) -> None:
        with pytest.raises(ProbeError) as exc_info:
            probe_duration(audio_file, FakeMediaProcessor(fail_probe=True))
        assert "Invalid data" in exc_info.value.reason

    @pytest.mark.parametrize("duration", [0, -1.0, None, float("nan"), float("inf")])
    def test_empty_media_is_probe_error(self, audio_file: Path, duration: float | None) -> None:
        with pytest.raises(ProbeError):
            probe_duration(audio_file, FakeMediaProcessor(duration=duration))


class TestCutSegment:
    def test_creates_named_artifact(self, audio_file: Path, tmp_path: Path) -> None:
        processor = FakeMediaProcessor()
        tracker = TempResourceTracker()
        segment = SegmentDescriptor(index=0, start_seconds=0, length_seconds=1400)

        artifact = cut_segment(audio_file, segment, tmp_path, processor, tracker, total_chunks=3)

        expected = tmp_path / "chunk-0.mp3"
        assert artifact == ChunkArtifact(0, expected, expected.stat().st_size)
        assert artifact.size_bytes > 0
        assert processor.cuts == [(audio_file, expected, 0, 1400)]
        assert tracker.paths == [expected]

    def test_failure_is_cut_error(self, audio_file: Path, tmp_path: Path) -> None:
        tracker = TempResourceTracker()
        segment = SegmentDescriptor(index=0, start_seconds=0, length_seconds=200)
        with pytest.raises(CutError) as exc_info:
            cut_segment(audio_file, segment, tmp_path, FakeMediaProcessor(fail_cut_at=0), tracker)
        assert exc_info.value.segment_index == 0
        assert tracker.paths == [tmp_path / "chunk-0.mp3"]

    def test_missing_output_is_cut_error(self, audio_file: Path, tmp_path: Path) -> None:
        class SilentProcessor(FakeMediaProcessor):
            def cut(self, source_path, output_path, start_seconds, length_seconds) -> None:
                pass

        segment = SegmentDescriptor(index=4, start_seconds=5600, length_seconds=10)
        with pytest.raises(CutError, match="was not created"):
            cut_segment(audio_file, segment, tmp_path, SilentProcessor(), TempResourceTracker())

    def test_chunk_filename(self) -> None:
        assert chunk_filename(12) == "chunk-12.mp3"
