"""Audio transcription service: WAV parsing, PCM decoding and ASR."""

from .errors import InvalidAudioError, TranscriptionError, WavFormatError

__all__ = ["TranscriptionError", "InvalidAudioError", "WavFormatError"]
