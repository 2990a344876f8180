"""
Application settings.

Typed access to the persisted settings cells, batch updates for related
groups of settings and the values derived from them. The reasoning provider
is never stored: it is recomputed from the selected reasoning model on every
read, so it cannot drift from the model even if the settings file is edited
by hand.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence
from dataclasses import dataclass
import logging
import os

from ..models.prompts import CustomPrompts, DEFAULT_PROMPTS
from ..models.provider_config import get_provider_config
from ..models.resolver import ProviderResolver
from . import cells
from .cells import SettingCell, SETTING_CELLS, CELLS_BY_KEY
from .storage import SettingsStorage

# Setup logging
logger = logging.getLogger(__name__)

ApiKeyListener = Callable[[str], None]


@dataclass(frozen=True)
class TranscriptionSettings:
    """Snapshot of the speech-to-text settings."""
    use_local_whisper: bool
    whisper_model: str
    allow_openai_fallback: bool
    allow_local_fallback: bool
    fallback_whisper_model: str
    preferred_language: str
    cloud_transcription_provider: str
    cloud_transcription_model: str
    cloud_transcription_base_url: str


@dataclass(frozen=True)
class ReasoningSettings:
    """Snapshot of the text enhancement settings, including the derived provider."""
    use_reasoning_model: bool
    reasoning_model: str
    reasoning_provider: str
    cloud_reasoning_base_url: str


@dataclass(frozen=True)
class ApiKeySettings:
    """Snapshot of the stored API keys."""
    openai_api_key: str
    anthropic_api_key: str
    gemini_api_key: str
    groq_api_key: str


class _CellAttribute:
    """Exposes a settings cell as a typed attribute of Settings."""

    def __init__(self, cell: SettingCell):
        self.cell = cell

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        return obj.get(self.cell.name)

    def __set__(self, obj, value) -> None:
        obj.set(self.cell.name, value)


class Settings:
    """
    Typed view over a settings storage backend.

    Every assignment persists immediately through the storage. Writes to an
    API key notify the registered listeners with the provider id, so cached
    clients can be dropped.
    """

    use_local_whisper = _CellAttribute(cells.USE_LOCAL_WHISPER)
    whisper_model = _CellAttribute(cells.WHISPER_MODEL)
    allow_openai_fallback = _CellAttribute(cells.ALLOW_OPENAI_FALLBACK)
    allow_local_fallback = _CellAttribute(cells.ALLOW_LOCAL_FALLBACK)
    fallback_whisper_model = _CellAttribute(cells.FALLBACK_WHISPER_MODEL)
    preferred_language = _CellAttribute(cells.PREFERRED_LANGUAGE)
    cloud_transcription_provider = _CellAttribute(cells.CLOUD_TRANSCRIPTION_PROVIDER)
    cloud_transcription_model = _CellAttribute(cells.CLOUD_TRANSCRIPTION_MODEL)
    cloud_transcription_base_url = _CellAttribute(cells.CLOUD_TRANSCRIPTION_BASE_URL)
    cloud_reasoning_base_url = _CellAttribute(cells.CLOUD_REASONING_BASE_URL)
    use_reasoning_model = _CellAttribute(cells.USE_REASONING_MODEL)
    reasoning_model = _CellAttribute(cells.REASONING_MODEL)
    openai_api_key = _CellAttribute(cells.OPENAI_API_KEY)
    anthropic_api_key = _CellAttribute(cells.ANTHROPIC_API_KEY)
    gemini_api_key = _CellAttribute(cells.GEMINI_API_KEY)
    groq_api_key = _CellAttribute(cells.GROQ_API_KEY)
    dictation_key = _CellAttribute(cells.DICTATION_KEY)
    activation_mode = _CellAttribute(cells.ACTIVATION_MODE)
    prefer_built_in_mic = _CellAttribute(cells.PREFER_BUILT_IN_MIC)
    selected_mic_device_id = _CellAttribute(cells.SELECTED_MIC_DEVICE_ID)
    agent_name = _CellAttribute(cells.AGENT_NAME)
    custom_prompts = _CellAttribute(cells.CUSTOM_PROMPTS)

    def __init__(self, storage: SettingsStorage, resolver: ProviderResolver):
        """
        Initialize settings.

        Args:
            storage: Backend the cells are persisted in
            resolver: Resolver used to derive the reasoning provider
        """
        self.storage = storage
        self.resolver = resolver
        self._api_key_listeners: List[ApiKeyListener] = []

    @staticmethod
    def names() -> List[str]:
        """Get every setting name in declaration order."""
        return list(SETTING_CELLS)

    @staticmethod
    def cell(name: str) -> SettingCell:
        """Get the cell behind a setting name."""
        try:
            return SETTING_CELLS[name]
        except KeyError:
            raise KeyError(f"Unknown setting: {name}") from None

    def get(self, name: str) -> Any:
        """Get a setting's value, or its default if it was never written."""
        return self.cell(name).read(self.storage)

    def set(self, name: str, value: Any) -> None:
        """Persist a setting and fire its side effects."""
        cell = self.cell(name)
        cell.write(self.storage, value)
        if cell.api_key_provider:
            self._notify_api_key_change(cell.api_key_provider)

    def reset(self, name: str) -> None:
        """Clear a setting back to its default."""
        self.set(name, None)

    def parse(self, name: str, raw: str) -> Any:
        """Decode a string the way the setting's stored form is decoded."""
        return self.cell(name).deserialize(raw)

    def is_stored(self, name: str) -> bool:
        """Check whether a setting has been written."""
        return self.storage.get(self.cell(name).key) is not None

    @property
    def reasoning_provider(self) -> str:
        """Provider of the selected reasoning model, "" if it cannot be determined."""
        return self.resolver.resolve_provider(self.reasoning_model)

    # Batch operations

    def update_transcription_settings(self, **fields: Any) -> None:
        """Apply the given speech-to-text settings, leaving the others untouched."""
        self._update(cells.TRANSCRIPTION_FIELDS, fields)

    def update_reasoning_settings(self, **fields: Any) -> None:
        """Apply the given reasoning settings, leaving the others untouched."""
        self._update(cells.REASONING_FIELDS, fields)

    def update_api_keys(self, **fields: Any) -> None:
        """Apply the given API keys, leaving the others untouched."""
        self._update(cells.API_KEY_FIELDS, fields)

    def _update(self, allowed: Sequence[str], fields: Dict[str, Any]) -> None:
        unexpected = sorted(set(fields) - set(allowed))
        if unexpected:
            raise TypeError(f"Unexpected settings for this group: {', '.join(unexpected)}")

        # None means "not given"; clearing a cell goes through reset()
        # Not transactional: fields written before a failure stay written
        for name in allowed:
            if fields.get(name) is not None:
                self.set(name, fields[name])

    # Snapshots

    def transcription_settings(self) -> TranscriptionSettings:
        return TranscriptionSettings(**{name: self.get(name) for name in cells.TRANSCRIPTION_FIELDS})

    def reasoning_settings(self) -> ReasoningSettings:
        return ReasoningSettings(
            reasoning_provider=self.reasoning_provider,
            **{name: self.get(name) for name in cells.REASONING_FIELDS}
        )

    def api_key_settings(self) -> ApiKeySettings:
        return ApiKeySettings(**{name: self.get(name) for name in cells.API_KEY_FIELDS})

    def effective_prompts(self) -> CustomPrompts:
        """Get the custom prompts, or the defaults if none are saved."""
        return self.custom_prompts or DEFAULT_PROMPTS

    # API keys

    def add_api_key_listener(self, listener: ApiKeyListener) -> None:
        """Register a callback invoked with the provider id whenever its API key is written."""
        self._api_key_listeners.append(listener)

    def remove_api_key_listener(self, listener: ApiKeyListener) -> None:
        if listener in self._api_key_listeners:
            self._api_key_listeners.remove(listener)

    def _notify_api_key_change(self, provider_id: str) -> None:
        logger.debug(f"API key changed for {provider_id}")
        for listener in list(self._api_key_listeners):
            listener(provider_id)

    def api_key_for(self, provider_id: str) -> str:
        """
        Get the API key a provider should use.

        Args:
            provider_id: Reasoning provider id

        Returns:
            The stored key, else the provider's environment variable, else "".
        """
        config = get_provider_config(provider_id)
        if config.api_key_storage_key:
            cell = CELLS_BY_KEY.get(config.api_key_storage_key)
            stored = cell.read(self.storage) if cell else ""
            if stored:
                return stored
        if config.api_key_env:
            return os.getenv(config.api_key_env, "")
        return ""

    def base_url_for(self, provider_id: str) -> Optional[str]:
        """Get the configured base URL for providers that need one, else None."""
        config = get_provider_config(provider_id)
        if not config.base_storage_key:
            return None
        cell = CELLS_BY_KEY.get(config.base_storage_key)
        return cell.read(self.storage).strip() if cell else ""
