"""
Model registry.

Holds the local runtime providers built from the catalog and answers model
lookups for the rest of the application. One registry is constructed by the
application's composition root and passed to whatever needs it.
"""

from typing import Optional, Dict, List, NamedTuple, Sequence
from dataclasses import asdict
from pathlib import Path
import logging

from .catalog import (
    ProviderCatalog,
    ModelDefinition,
    LocalModel,
    LocalProviderData,
    CloudModelDefinition,
    CloudProviderData,
    TranscriptionModelDefinition,
    TranscriptionProviderData,
    WhisperModelInfo,
    load_catalog
)
from .prompts import create_prompt_formatter

# Setup logging
logger = logging.getLogger(__name__)

FALLBACK_TRANSCRIPTION_MODEL = "gpt-4o-mini-transcribe"


class ModelProvider:
    """A local runtime provider: its models, prompt template and download location."""

    def __init__(
        self,
        id: str,
        name: str,
        base_url: str,
        models: Sequence[ModelDefinition],
        prompt_template: str
    ):
        self.id = id
        self.name = name
        self.base_url = base_url
        self.models = tuple(models)
        self.prompt_template = prompt_template
        self._formatter = create_prompt_formatter(prompt_template)

    @classmethod
    def from_data(cls, data: LocalProviderData) -> "ModelProvider":
        """Create a provider from its catalog entry."""
        return cls(
            id=data.id,
            name=data.name,
            base_url=data.base_url,
            models=data.models,
            prompt_template=data.prompt_template
        )

    def format_prompt(self, text: str, system_prompt: str) -> str:
        """Render this provider's prompt template."""
        return self._formatter(text, system_prompt)

    def get_download_url(self, model: ModelDefinition) -> str:
        """Get the URL a model file is downloaded from."""
        return f"{self.base_url}/{model.hf_repo}/resolve/main/{model.file_name}"

    def __repr__(self) -> str:
        return f"ModelProvider(id={self.id!r}, models={len(self.models)})"


class ModelLookup(NamedTuple):
    """A model together with the provider that owns it."""
    model: ModelDefinition
    provider: ModelProvider


class ModelRegistry:
    """
    Registry of local model providers plus pass-through access to cloud,
    transcription and Whisper catalog data.

    Lookups are linear scans in registration order.
    """

    def __init__(self, catalog: ProviderCatalog):
        """
        Initialize the registry from catalog data.

        Args:
            catalog: Provider catalog to seed local providers from
        """
        self.catalog = catalog
        self._providers: Dict[str, ModelProvider] = {}
        self._revision = 0

        for provider_data in catalog.local_providers:
            self.register_provider(ModelProvider.from_data(provider_data))

    @property
    def revision(self) -> int:
        """Counter bumped on every registration, for views that cache projections."""
        return self._revision

    def register_provider(self, provider: ModelProvider) -> None:
        """Add a provider, replacing any existing provider with the same id."""
        if provider.id in self._providers:
            logger.debug(f"Replacing registered provider {provider.id}")
        self._providers[provider.id] = provider
        self._revision += 1

    def get_provider(self, provider_id: str) -> Optional[ModelProvider]:
        """Get a registered provider by id."""
        return self._providers.get(provider_id)

    def get_all_providers(self) -> List[ModelProvider]:
        """Get all registered providers in registration order."""
        return list(self._providers.values())

    def get_model(self, model_id: str) -> Optional[ModelLookup]:
        """
        Find a local model by id.

        Args:
            model_id: Model identifier

        Returns:
            The first matching model and its provider, or None.
        """
        for provider in self._providers.values():
            for model in provider.models:
                if model.id == model_id:
                    return ModelLookup(model, provider)
        return None

    def get_all_models(self) -> List[LocalModel]:
        """Get every local model tagged with its provider id, in registration order."""
        models = []
        for provider in self._providers.values():
            for model in provider.models:
                fields = asdict(model)
                fields["provider_id"] = provider.id
                models.append(LocalModel(**fields))
        return models

    def get_cloud_providers(self) -> List[CloudProviderData]:
        """Get the cloud reasoning providers from the catalog."""
        return list(self.catalog.cloud_providers)

    def get_cloud_model(self, model_id: str) -> Optional[CloudModelDefinition]:
        """Find a cloud reasoning model by id."""
        for provider in self.catalog.cloud_providers:
            for model in provider.models:
                if model.id == model_id:
                    return model
        return None

    def get_transcription_providers(self) -> List[TranscriptionProviderData]:
        """Get the cloud transcription providers from the catalog."""
        return list(self.catalog.transcription_providers)

    def get_transcription_provider(self, provider_id: str) -> Optional[TranscriptionProviderData]:
        """Find a transcription provider by id."""
        for provider in self.catalog.transcription_providers:
            if provider.id == provider_id:
                return provider
        return None

    def get_transcription_models(self, provider_id: str) -> List[TranscriptionModelDefinition]:
        """Get a transcription provider's models, or an empty list if it is unknown."""
        provider = self.get_transcription_provider(provider_id)
        return list(provider.models) if provider else []

    def get_default_transcription_model(self, provider_id: str) -> str:
        """Get the first model of a transcription provider."""
        models = self.get_transcription_models(provider_id)
        return models[0].id if models else FALLBACK_TRANSCRIPTION_MODEL

    def get_whisper_models(self) -> Dict[str, WhisperModelInfo]:
        """Get the bundled Whisper model sizes."""
        return dict(self.catalog.whisper_models)

    def get_whisper_model_info(self, model_id: str) -> Optional[WhisperModelInfo]:
        """Get metadata for one Whisper model size."""
        return self.catalog.whisper_models.get(model_id)


def create_model_registry(catalog_path: Optional[Path] = None) -> ModelRegistry:
    """Create a ModelRegistry from the packaged catalog or the given file."""
    return ModelRegistry(load_catalog(catalog_path))
