#!/usr/bin/env python3

"""
Converts a long audio or video file into a text transcription.

This script performs the following steps:
1.  Parses command-line arguments to get the input media path and the output
    text path (both required), plus optional chunk duration and model overrides.
2.  Checks that the input file exists and is not empty.
3.  If the input is a video, extracts its audio track to a temporary MP3 file
    using ffmpeg.
4.  Reads the total duration with ffprobe and splits the audio into chunks of
    at most 1400 seconds, safely below the transcription model's 1500 second limit.
5.  Transcribes each chunk individually using the OpenAI API. A chunk that
    fails to transcribe is logged and left out; the remaining chunks still run.
6.  Joins the chunk transcriptions in order, separated by blank lines, and
    saves the result to the output path.
7.  Removes every temporary file and directory, whether or not the run succeeded.

Requires:
- Python 3.10+
- `openai` library
- `python-dotenv` library
- `colorama` library
- `ffmpeg` and `ffprobe` installed and available in the system PATH
- An OpenAI API key set in a .env file or environment variables.
"""

from pathlib import Path
import argparse
import sys
from openai import OpenAI
from dotenv import load_dotenv
from media_transcriber.config import load_settings
from media_transcriber.errors import TranscriberError
from media_transcriber.ffmpeg import FfmpegMediaProcessor
from media_transcriber.logger import log_bold, log_cyan, log_error, log_info, log_success
from media_transcriber.pipeline import TranscriptionPipeline
from media_transcriber.speech_to_text import OpenAITranscriber


def parse_args(argv: list[str] | None = None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Convert audio or video files to text transcription using the OpenAI transcription API."
    )
    parser.add_argument("-i", "--input", type=str, required=True, help="Path to the input audio or video file.")
    parser.add_argument("-o", "--output", type=str, required=True, help="Path where the transcription will be saved.")
    parser.add_argument("--max-chunk-duration", type=float, help="Maximum duration of each chunk in seconds (default: 1400, must stay below 1500).")
    parser.add_argument("--model", type=str, help="OpenAI transcription model (default: gpt-4o-transcribe).")
    return parser.parse_args(argv)


def build_pipeline(settings) -> TranscriptionPipeline:
    """Wires the ffmpeg media processor and the OpenAI transcriber into a pipeline."""
    transcriber = OpenAITranscriber(OpenAI(), model=settings.transcribe_model)
    return TranscriptionPipeline(FfmpegMediaProcessor(), transcriber, settings.max_chunk_duration)


def main(argv: list[str] | None = None) -> int:
    """
    Runs a transcription from the command line.

    Returns:
        0 on success, 1 on any fatal error.
    """
    load_dotenv(override=True)
    args = parse_args(argv)

    input_path = Path(args.input).resolve()
    output_path = Path(args.output).resolve()

    try:
        settings = load_settings(args.max_chunk_duration, args.model)
        log_info(f"Using model {log_bold(settings.transcribe_model)} with chunks of at most {settings.max_chunk_duration:g} seconds")
        pipeline = build_pipeline(settings)
        pipeline.run(input_path, output_path)
    except TranscriberError as e:
        log_error(f"Error during transcription process: {e}")
        return 1
    except Exception as e:
        log_error(f"An unexpected error occurred during transcription: {e}")
        return 1

    log_success("Transcription completed successfully!")
    log_info(f"Full transcription has been saved to: {log_cyan(str(output_path))}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
