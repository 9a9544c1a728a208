from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

from pydantic import Field

from .common import ApiResponse, BinaryResponse, RequestModel, WireEnum, WireModel
from .models import AudioModel, SpeechModel
from .uploads import MultipartRequest, UploadField


class AudioResponseFormat(WireEnum):
    JSON = "json"
    TEXT = "text"
    SRT = "srt"
    VERBOSE_JSON = "verbose_json"
    VTT = "vtt"


# Formats whose body is plain text, not JSON
TEXT_FORMATS = frozenset({AudioResponseFormat.TEXT, AudioResponseFormat.SRT, AudioResponseFormat.VTT})


class TimestampGranularity(WireEnum):
    WORD = "word"
    SEGMENT = "segment"


class Voice(WireEnum):
    ALLOY = "alloy"
    ECHO = "echo"
    FABLE = "fable"
    ONYX = "onyx"
    NOVA = "nova"
    SHIMMER = "shimmer"


class SpeechFormat(WireEnum):
    MP3 = "mp3"
    OPUS = "opus"
    AAC = "aac"
    FLAC = "flac"
    WAV = "wav"
    PCM = "pcm"


class AudioTranscriptionRequest(MultipartRequest):
    file_fields = ("file",)

    file: UploadField
    model: AudioModel = AudioModel.WHISPER_1
    language: Optional[str] = None
    prompt: Optional[str] = None
    response_format: Optional[AudioResponseFormat] = None
    temperature: Optional[float] = None
    timestamp_granularities: Optional[List[TimestampGranularity]] = None

    def returns_text(self) -> bool:
        return self.response_format in TEXT_FORMATS


class AudioTranslationRequest(MultipartRequest):
    file_fields = ("file",)

    file: UploadField
    model: AudioModel = AudioModel.WHISPER_1
    prompt: Optional[str] = None
    response_format: Optional[AudioResponseFormat] = None
    temperature: Optional[float] = None

    def returns_text(self) -> bool:
        return self.response_format in TEXT_FORMATS


class TranscriptionWord(WireModel):
    word: str
    start: float
    end: float


class TranscriptionSegment(WireModel):
    id: int
    seek: Optional[int] = None
    start: float
    end: float
    text: str
    tokens: List[int] = Field(default_factory=list)
    temperature: Optional[float] = None
    avg_logprob: Optional[float] = None
    compression_ratio: Optional[float] = None
    no_speech_prob: Optional[float] = None


class AudioTranscriptionResponse(ApiResponse):
    """For text/srt/vtt formats ``text`` holds the raw body."""
    text: str
    language: Optional[str] = None
    duration: Optional[float] = None
    words: Optional[List[TranscriptionWord]] = None
    segments: Optional[List[TranscriptionSegment]] = None


class AudioTranslationResponse(ApiResponse):
    text: str
    language: Optional[str] = None
    duration: Optional[float] = None
    segments: Optional[List[TranscriptionSegment]] = None


class AudioSpeechRequest(RequestModel):
    model: SpeechModel
    input: str
    voice: Voice
    response_format: Optional[SpeechFormat] = None
    speed: Optional[float] = None
    # local destination for the audio; never sent
    output: Optional[Path] = Field(default=None, exclude=True)

    @classmethod
    def for_text(cls, model: Union[SpeechModel, str], input: str, voice: Union[Voice, str],
                 output: Optional[Union[str, Path]] = None) -> "AudioSpeechRequest":
        return cls(model=model, input=input, voice=voice, output=output)


class AudioSpeechResponse(BinaryResponse):
    output: Optional[Path] = None

    @property
    def result(self) -> bool:
        """True once the audio was written to ``output``."""
        return self.output is not None and self.output.exists()
