"""
Typed settings cells.

Each cell pairs a storage key with a default and the functions that turn a
value into its stored string and back. Decoding never fails: anything that
cannot be parsed is coerced to a fixed value.

Boolean cells follow two conventions. Cells defaulting to False are
only True for the exact string "true"; cells defaulting to True are only
False for the exact string "false".
"""

from typing import Any, Callable, Dict, Generic, Optional, Tuple, TypeVar
from dataclasses import dataclass
import json
import logging

from ..models.prompts import CustomPrompts, DEFAULT_AGENT_PROMPT, DEFAULT_REGULAR_PROMPT
from .storage import SettingsStorage

# Setup logging
logger = logging.getLogger(__name__)

T = TypeVar("T")

OPENAI_API_BASE = "https://api.openai.com/v1"


def serialize_bool(value: bool) -> str:
    if not isinstance(value, bool):
        raise TypeError(f"Expected a bool, got {type(value).__name__}: {value!r}")
    return "true" if value else "false"


def false_unless_true(raw: str) -> bool:
    return raw == "true"


def true_unless_false(raw: str) -> bool:
    return raw != "false"


def decode_activation_mode(raw: str) -> str:
    return "push" if raw == "push" else "tap"


def encode_custom_prompts(prompts: CustomPrompts) -> str:
    return json.dumps({"agent": prompts.agent, "regular": prompts.regular})


def decode_custom_prompts(raw: str) -> Optional[CustomPrompts]:
    """
    Decode stored custom prompts.

    Empty fields fall back to the defaults, so only prompts with a non-empty
    agent and regular text come back unchanged from encode_custom_prompts.

    Returns:
        The prompts, or None if the stored text is not a JSON object.
    """
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to load custom prompts: {e}")
        return None

    if not isinstance(parsed, dict):
        logger.warning("Failed to load custom prompts: expected a JSON object")
        return None

    agent = parsed.get("agent")
    regular = parsed.get("regular")
    return CustomPrompts(
        agent=agent if isinstance(agent, str) and agent else DEFAULT_AGENT_PROMPT,
        regular=regular if isinstance(regular, str) and regular else DEFAULT_REGULAR_PROMPT
    )


@dataclass(frozen=True)
class SettingCell(Generic[T]):
    """One persisted, independently typed setting."""
    name: str
    key: str
    default: T
    serialize: Callable[[T], str] = str
    deserialize: Callable[[str], T] = str
    api_key_provider: Optional[str] = None

    def read(self, storage: SettingsStorage) -> T:
        """Get the decoded value, or the default if nothing is stored."""
        raw = storage.get(self.key)
        if raw is None:
            return self.default
        return self.deserialize(raw)

    def write(self, storage: SettingsStorage, value: Optional[T]) -> None:
        """Persist a value. None clears the cell back to its default."""
        if value is None:
            storage.remove(self.key)
        else:
            storage.set(self.key, self.serialize(value))


def _bool_cell(name: str, key: str, default: bool) -> SettingCell[bool]:
    decode = true_unless_false if default else false_unless_true
    return SettingCell(name, key, default, serialize=serialize_bool, deserialize=decode)


def _str_cell(name: str, key: str, default: str = "") -> SettingCell[str]:
    return SettingCell(name, key, default)


def _api_key_cell(name: str, key: str, provider: str) -> SettingCell[str]:
    return SettingCell(name, key, "", api_key_provider=provider)


# Transcription
USE_LOCAL_WHISPER = _bool_cell("use_local_whisper", "useLocalWhisper", False)
WHISPER_MODEL = _str_cell("whisper_model", "whisperModel", "base")
ALLOW_OPENAI_FALLBACK = _bool_cell("allow_openai_fallback", "allowOpenAIFallback", False)
ALLOW_LOCAL_FALLBACK = _bool_cell("allow_local_fallback", "allowLocalFallback", False)
FALLBACK_WHISPER_MODEL = _str_cell("fallback_whisper_model", "fallbackWhisperModel", "base")
PREFERRED_LANGUAGE = _str_cell("preferred_language", "preferredLanguage", "en")
CLOUD_TRANSCRIPTION_PROVIDER = _str_cell(
    "cloud_transcription_provider", "cloudTranscriptionProvider", "openai"
)
CLOUD_TRANSCRIPTION_MODEL = _str_cell(
    "cloud_transcription_model", "cloudTranscriptionModel", "gpt-4o-mini-transcribe"
)
CLOUD_TRANSCRIPTION_BASE_URL = _str_cell(
    "cloud_transcription_base_url", "cloudTranscriptionBaseUrl", OPENAI_API_BASE
)

# Reasoning
CLOUD_REASONING_BASE_URL = _str_cell(
    "cloud_reasoning_base_url", "cloudReasoningBaseUrl", OPENAI_API_BASE
)
USE_REASONING_MODEL = _bool_cell("use_reasoning_model", "useReasoningModel", True)
REASONING_MODEL = _str_cell("reasoning_model", "reasoningModel")

# API keys
OPENAI_API_KEY = _api_key_cell("openai_api_key", "openaiApiKey", "openai")
ANTHROPIC_API_KEY = _api_key_cell("anthropic_api_key", "anthropicApiKey", "anthropic")
GEMINI_API_KEY = _api_key_cell("gemini_api_key", "geminiApiKey", "gemini")
GROQ_API_KEY = _api_key_cell("groq_api_key", "groqApiKey", "groq")

# Hotkey and microphone
DICTATION_KEY = _str_cell("dictation_key", "dictationKey")
ACTIVATION_MODE = SettingCell("activation_mode", "activationMode", "tap", deserialize=decode_activation_mode)
PREFER_BUILT_IN_MIC = _bool_cell("prefer_built_in_mic", "preferBuiltInMic", True)
SELECTED_MIC_DEVICE_ID = _str_cell("selected_mic_device_id", "selectedMicDeviceId")

# Prompts
AGENT_NAME = _str_cell("agent_name", "agentName", "Assistant")
CUSTOM_PROMPTS: SettingCell[Optional[CustomPrompts]] = SettingCell(
    "custom_prompts",
    "customPrompts",
    None,
    serialize=encode_custom_prompts,
    deserialize=decode_custom_prompts
)

SETTING_CELLS: Dict[str, SettingCell[Any]] = {
    cell.name: cell
    for cell in (
        USE_LOCAL_WHISPER,
        WHISPER_MODEL,
        ALLOW_OPENAI_FALLBACK,
        ALLOW_LOCAL_FALLBACK,
        FALLBACK_WHISPER_MODEL,
        PREFERRED_LANGUAGE,
        CLOUD_TRANSCRIPTION_PROVIDER,
        CLOUD_TRANSCRIPTION_MODEL,
        CLOUD_TRANSCRIPTION_BASE_URL,
        CLOUD_REASONING_BASE_URL,
        USE_REASONING_MODEL,
        REASONING_MODEL,
        OPENAI_API_KEY,
        ANTHROPIC_API_KEY,
        GEMINI_API_KEY,
        GROQ_API_KEY,
        DICTATION_KEY,
        ACTIVATION_MODE,
        PREFER_BUILT_IN_MIC,
        SELECTED_MIC_DEVICE_ID,
        AGENT_NAME,
        CUSTOM_PROMPTS,
    )
}

CELLS_BY_KEY: Dict[str, SettingCell[Any]] = {cell.key: cell for cell in SETTING_CELLS.values()}

TRANSCRIPTION_FIELDS: Tuple[str, ...] = (
    "use_local_whisper",
    "whisper_model",
    "allow_openai_fallback",
    "allow_local_fallback",
    "fallback_whisper_model",
    "preferred_language",
    "cloud_transcription_provider",
    "cloud_transcription_model",
    "cloud_transcription_base_url",
)

REASONING_FIELDS: Tuple[str, ...] = (
    "use_reasoning_model",
    "reasoning_model",
    "cloud_reasoning_base_url",
)

API_KEY_FIELDS: Tuple[str, ...] = (
    "openai_api_key",
    "anthropic_api_key",
    "gemini_api_key",
    "groq_api_key",
)
