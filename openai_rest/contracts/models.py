from __future__ import annotations

from .common import WireEnum


class ChatModel(WireEnum):
    GPT_4O = "gpt-4o"
    GPT_4O_MINI = "gpt-4o-mini"
    GPT_4_TURBO = "gpt-4-turbo"
    GPT_4_TURBO_PREVIEW = "gpt-4-turbo-preview"
    GPT_4_0125_PREVIEW = "gpt-4-0125-preview"
    GPT_4_VISION_PREVIEW = "gpt-4-vision-preview"
    GPT_4 = "gpt-4"
    GPT_4_32K = "gpt-4-32k"
    GPT_3_5_TURBO = "gpt-3.5-turbo"
    GPT_3_5_TURBO_0125 = "gpt-3.5-turbo-0125"
    GPT_3_5_TURBO_16K = "gpt-3.5-turbo-16k"


DEFAULT_CHAT_MODEL = ChatModel.GPT_4O


class CompletionModel(WireEnum):
    GPT_3_5_TURBO_INSTRUCT = "gpt-3.5-turbo-instruct"
    DAVINCI_002 = "davinci-002"
    BABBAGE_002 = "babbage-002"
    TEXT_DAVINCI_003 = "text-davinci-003"


class EditModel(WireEnum):
    TEXT_DAVINCI_EDIT_001 = "text-davinci-edit-001"
    CODE_DAVINCI_EDIT_001 = "code-davinci-edit-001"


class EmbeddingModel(WireEnum):
    TEXT_EMBEDDING_3_SMALL = "text-embedding-3-small"
    TEXT_EMBEDDING_3_LARGE = "text-embedding-3-large"
    TEXT_EMBEDDING_ADA_002 = "text-embedding-ada-002"


class ImageModel(WireEnum):
    DALL_E_2 = "dall-e-2"
    DALL_E_3 = "dall-e-3"


class AudioModel(WireEnum):
    WHISPER_1 = "whisper-1"


class SpeechModel(WireEnum):
    TTS_1 = "tts-1"
    TTS_1_HD = "tts-1-hd"


class ModerationModel(WireEnum):
    TEXT_MODERATION_LATEST = "text-moderation-latest"
    TEXT_MODERATION_STABLE = "text-moderation-stable"
    OMNI_MODERATION_LATEST = "omni-moderation-latest"


class FineTuningModel(WireEnum):
    GPT_3_5_TURBO = "gpt-3.5-turbo"
    GPT_4O_MINI_2024_07_18 = "gpt-4o-mini-2024-07-18"
    DAVINCI_002 = "davinci-002"
    BABBAGE_002 = "babbage-002"
