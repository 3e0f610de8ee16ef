"""
This module defines the speech-to-text interface used by the pipeline and
its OpenAI implementation, which sends one bounded-duration audio file per
request and returns the plain-text transcript for that file alone.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from openai import OpenAI, OpenAIError

from media_transcriber.config import DEFAULT_TRANSCRIBE_MODEL, TRANSCRIPT_RESPONSE_FORMAT
from media_transcriber.errors import TranscriptionChunkError


class SpeechToText(ABC):
    """
    Interface for transcription services.
    """

    @abstractmethod
    def transcribe(self, file_path: Path) -> str:
        """
        Transcribes a single audio file.

        Args:
            file_path: Path to an audio file below the service's duration ceiling

        Returns:
            The transcript text

        Raises:
            TranscriptionChunkError: if the service call fails.
        """
        pass


class OpenAITranscriber(SpeechToText):
    """
    Transcribes audio files through the OpenAI audio transcription endpoint.

    Attributes:
        client: An instance of the OpenAI client used for API calls.
        model: The transcription model name.
        response_format: The response format requested from the API.
    """

    def __init__(self, client: OpenAI, model: str = DEFAULT_TRANSCRIBE_MODEL, response_format: str = TRANSCRIPT_RESPONSE_FORMAT):
        self.client = client
        self.model = model
        self.response_format = response_format

    def transcribe(self, file_path: Path) -> str:
        try:
            with open(file_path, "rb") as audio_file:
                transcription = self.client.audio.transcriptions.create(
                    model=self.model,
                    file=audio_file,
                    response_format=self.response_format,
                )
        except (OpenAIError, OSError) as e:
            raise TranscriptionChunkError(file_path, str(e)) from e

        # response_format="text" yields a bare string, json formats an object
        text = transcription if isinstance(transcription, str) else getattr(transcription, "text", None)
        if text is None:
            raise TranscriptionChunkError(file_path, f"unexpected response of type {type(transcription).__name__}")
        return text.strip()
