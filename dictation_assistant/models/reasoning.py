"""
Unified view of reasoning models.

Flattens cloud vendors and local runtimes into the single list the settings
layer and the model picker work with. Every local provider is merged into
one synthetic "local" bucket.
"""

from typing import Optional, Dict, List, Tuple
from dataclasses import dataclass
import logging

from .registry import ModelRegistry

# Setup logging
logger = logging.getLogger(__name__)

LOCAL_PROVIDER_ID = "local"
LOCAL_PROVIDER_NAME = "Local AI"


@dataclass(frozen=True)
class ReasoningModel:
    """A selectable reasoning model."""
    value: str
    label: str
    description: str


@dataclass(frozen=True)
class ReasoningModelWithProvider(ReasoningModel):
    """A reasoning model with its owning provider id and display label."""
    provider: str = ""
    full_label: str = ""


@dataclass(frozen=True)
class ReasoningProvider:
    """A provider as seen by the settings layer."""
    name: str
    models: Tuple[ReasoningModel, ...] = ()


def build_reasoning_providers(registry: ModelRegistry) -> Dict[str, ReasoningProvider]:
    """
    Build the reasoning provider mapping from the registry.

    Args:
        registry: Model registry holding the catalog and local providers

    Returns:
        Cloud providers in catalog order followed by the "local" bucket.
    """
    providers: Dict[str, ReasoningProvider] = {}

    for cloud_provider in registry.get_cloud_providers():
        providers[cloud_provider.id] = ReasoningProvider(
            name=cloud_provider.name,
            models=tuple(
                ReasoningModel(value=m.id, label=m.name, description=m.description)
                for m in cloud_provider.models
            )
        )

    providers[LOCAL_PROVIDER_ID] = ReasoningProvider(
        name=LOCAL_PROVIDER_NAME,
        models=tuple(
            ReasoningModel(
                value=model.id,
                label=model.name,
                description=f"{model.description} ({model.size})"
            )
            for model in registry.get_all_models()
        )
    )

    return providers


class ReasoningCatalog:
    """
    Memoized reasoning provider view over a ModelRegistry.

    The view is rebuilt whenever a provider is registered after it was built.
    """

    def __init__(self, registry: ModelRegistry):
        self.registry = registry
        self._providers: Optional[Dict[str, ReasoningProvider]] = None
        self._models: Optional[List[ReasoningModelWithProvider]] = None
        self._built_revision = -1

    def _refresh(self) -> None:
        if self._providers is not None and self._built_revision == self.registry.revision:
            return

        self._providers = build_reasoning_providers(self.registry)
        self._models = [
            ReasoningModelWithProvider(
                value=model.value,
                label=model.label,
                description=model.description,
                provider=provider_id,
                full_label=f"{provider.name} {model.label}"
            )
            for provider_id, provider in self._providers.items()
            for model in provider.models
        ]
        self._built_revision = self.registry.revision
        logger.debug(f"Built reasoning view with {len(self._models)} models")

    @property
    def providers(self) -> Dict[str, ReasoningProvider]:
        """Reasoning providers keyed by id."""
        self._refresh()
        return dict(self._providers)

    def get_all_reasoning_models(self) -> List[ReasoningModelWithProvider]:
        """Get every reasoning model, provider by provider."""
        self._refresh()
        return list(self._models)

    def find_model(self, model_id: str) -> Optional[ReasoningModelWithProvider]:
        """Find the first reasoning model with the given id."""
        for model in self.get_all_reasoning_models():
            if model.value == model_id:
                return model
        return None

    def get_reasoning_model_label(self, model_id: str) -> str:
        """Get "<provider> <model>" for a model id, or the id itself if unknown."""
        model = self.find_model(model_id)
        return model.full_label if model else model_id
