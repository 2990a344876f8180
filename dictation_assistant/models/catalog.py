"""
Provider catalog seed data.

Loads the static description of every known provider and model (local GGUF
providers, cloud reasoning vendors, cloud transcription vendors and the
bundled Whisper sizes) into immutable dataclasses. The catalog is read once
at startup and never changes for the lifetime of the process.
"""

from typing import Optional, Dict, Any, List, Tuple
from dataclasses import dataclass, field
from pathlib import Path
import json
import logging

# Setup logging
logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "model_registry_data.json"


class CatalogError(ValueError):
    """Raised when catalog data is missing, unreadable or malformed."""


@dataclass(frozen=True)
class ModelDefinition:
    """A downloadable local model."""
    id: str
    name: str
    size: str
    size_bytes: int
    description: str
    file_name: str
    quantization: str
    context_length: int
    hf_repo: str
    recommended: bool = False


@dataclass(frozen=True)
class LocalModel(ModelDefinition):
    """A local model tagged with the id of the provider that owns it."""
    provider_id: str = ""


@dataclass(frozen=True)
class LocalProviderData:
    """Catalog entry for a local runtime provider."""
    id: str
    name: str
    base_url: str
    prompt_template: str
    models: Tuple[ModelDefinition, ...] = ()


@dataclass(frozen=True)
class CloudModelDefinition:
    """A model served by a cloud reasoning vendor."""
    id: str
    name: str
    description: str
    disable_thinking: bool = False


@dataclass(frozen=True)
class CloudProviderData:
    """Catalog entry for a cloud reasoning vendor."""
    id: str
    name: str
    models: Tuple[CloudModelDefinition, ...] = ()


@dataclass(frozen=True)
class TranscriptionModelDefinition:
    """A hosted speech-to-text model."""
    id: str
    name: str
    description: str


@dataclass(frozen=True)
class TranscriptionProviderData:
    """Catalog entry for a cloud transcription vendor."""
    id: str
    name: str
    base_url: str
    models: Tuple[TranscriptionModelDefinition, ...] = ()


@dataclass(frozen=True)
class WhisperModelInfo:
    """Metadata for one of the bundled Whisper model sizes."""
    name: str
    description: str
    size: str
    size_mb: int
    recommended: bool = False


@dataclass(frozen=True)
class ProviderCatalog:
    """Everything the registry is seeded from."""
    whisper_models: Dict[str, WhisperModelInfo] = field(default_factory=dict)
    transcription_providers: Tuple[TranscriptionProviderData, ...] = ()
    cloud_providers: Tuple[CloudProviderData, ...] = ()
    local_providers: Tuple[LocalProviderData, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProviderCatalog":
        """
        Build a catalog from its JSON document form.

        Args:
            data: Parsed catalog document using the camelCase keys of
                model_registry_data.json

        Returns:
            The immutable catalog.

        Raises:
            CatalogError: If a required key is missing or has the wrong shape.
        """
        if not isinstance(data, dict):
            raise CatalogError("Catalog document must be a JSON object")

        try:
            whisper_models = {
                model_id: WhisperModelInfo(
                    name=info["name"],
                    description=info["description"],
                    size=info["size"],
                    size_mb=int(info["sizeMb"]),
                    recommended=bool(info.get("recommended", False))
                )
                for model_id, info in data.get("whisperModels", {}).items()
            }

            transcription_providers = tuple(
                TranscriptionProviderData(
                    id=provider["id"],
                    name=provider["name"],
                    base_url=provider["baseUrl"],
                    models=tuple(
                        TranscriptionModelDefinition(
                            id=model["id"],
                            name=model["name"],
                            description=model["description"]
                        )
                        for model in provider["models"]
                    )
                )
                for provider in data.get("transcriptionProviders", [])
            )

            cloud_providers = tuple(
                CloudProviderData(
                    id=provider["id"],
                    name=provider["name"],
                    models=tuple(
                        CloudModelDefinition(
                            id=model["id"],
                            name=model["name"],
                            description=model["description"],
                            disable_thinking=bool(model.get("disableThinking", False))
                        )
                        for model in provider["models"]
                    )
                )
                for provider in data.get("cloudProviders", [])
            )

            local_providers = tuple(
                LocalProviderData(
                    id=provider["id"],
                    name=provider["name"],
                    base_url=provider["baseUrl"],
                    prompt_template=provider["promptTemplate"],
                    models=tuple(_parse_model(model) for model in provider["models"])
                )
                for provider in data.get("localProviders", [])
            )
        except KeyError as e:
            raise CatalogError(f"Catalog entry is missing required key {e}") from e
        except (TypeError, ValueError, AttributeError) as e:
            raise CatalogError(f"Catalog entry is malformed: {e}") from e

        return cls(
            whisper_models=whisper_models,
            transcription_providers=transcription_providers,
            cloud_providers=cloud_providers,
            local_providers=local_providers
        )

    def duplicate_model_ids(self) -> List[str]:
        """List reasoning model ids that appear more than once across providers."""
        seen = set()
        duplicates = []
        all_ids = [m.id for p in self.cloud_providers for m in p.models]
        all_ids += [m.id for p in self.local_providers for m in p.models]
        for model_id in all_ids:
            if model_id in seen and model_id not in duplicates:
                duplicates.append(model_id)
            seen.add(model_id)
        return duplicates


def _parse_model(model: Dict[str, Any]) -> ModelDefinition:
    return ModelDefinition(
        id=model["id"],
        name=model["name"],
        size=model["size"],
        size_bytes=int(model["sizeBytes"]),
        description=model["description"],
        file_name=model["fileName"],
        quantization=model["quantization"],
        context_length=int(model["contextLength"]),
        hf_repo=model["hfRepo"],
        recommended=bool(model.get("recommended", False))
    )


def load_catalog(path: Optional[Path] = None) -> ProviderCatalog:
    """
    Load the provider catalog from a JSON file.

    Args:
        path: Catalog file to read. Defaults to the packaged catalog.

    Returns:
        The parsed catalog.

    Raises:
        CatalogError: If the file cannot be read or parsed.
    """
    catalog_path = Path(path) if path else DEFAULT_CATALOG_PATH

    try:
        with open(catalog_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except OSError as e:
        raise CatalogError(f"Cannot read catalog {catalog_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise CatalogError(f"Catalog {catalog_path} is not valid JSON: {e}") from e

    catalog = ProviderCatalog.from_dict(data)

    duplicates = catalog.duplicate_model_ids()
    if duplicates:
        # Lookups are first-match-wins for repeated ids
        logger.warning(f"Catalog {catalog_path} repeats model ids: {', '.join(duplicates)}")

    logger.info(
        f"Loaded catalog from {catalog_path}: "
        f"{len(catalog.local_providers)} local, {len(catalog.cloud_providers)} cloud, "
        f"{len(catalog.transcription_providers)} transcription providers"
    )
    return catalog
