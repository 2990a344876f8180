"""Shared fixtures for the dictation assistant tests."""

import copy

import pytest

from dictation_assistant.models.catalog import ProviderCatalog, load_catalog
from dictation_assistant.models.reasoning import ReasoningCatalog
from dictation_assistant.models.registry import ModelRegistry
from dictation_assistant.models.resolver import ProviderResolver
from dictation_assistant.settings.settings import Settings
from dictation_assistant.settings.storage import MemoryStorage


def local_model(model_id: str, name: str = "Model", size: str = "1GB") -> dict:
    return {
        "id": model_id,
        "name": name,
        "size": size,
        "sizeBytes": 1000,
        "description": f"{name} description",
        "fileName": f"{model_id}.gguf",
        "quantization": "Q4_K_M",
        "contextLength": 4096,
        "hfRepo": f"org/{model_id}-GGUF"
    }


SMALL_CATALOG = {
    "whisperModels": {
        "base": {"name": "Base", "description": "Balanced", "size": "74MB", "sizeMb": 74, "recommended": True},
        "tiny": {"name": "Tiny", "description": "Fastest", "size": "39MB", "sizeMb": 39}
    },
    "transcriptionProviders": [
        {
            "id": "openai",
            "name": "OpenAI",
            "baseUrl": "https://api.openai.com/v1",
            "models": [
                {"id": "gpt-4o-mini-transcribe", "name": "Mini", "description": "Fast"},
                {"id": "whisper-1", "name": "Whisper", "description": "Classic"}
            ]
        },
        {"id": "empty", "name": "Empty", "baseUrl": "https://example.com", "models": []}
    ],
    "cloudProviders": [
        {
            "id": "openai",
            "name": "OpenAI",
            "models": [
                {"id": "gpt-5", "name": "GPT-5", "description": "Flagship"},
                {"id": "gpt-5-mini", "name": "GPT-5 Mini", "description": "Small"}
            ]
        },
        {
            "id": "anthropic",
            "name": "Anthropic",
            "models": [
                {"id": "claude-sonnet-4-5", "name": "Claude Sonnet 4.5", "description": "Balanced"}
            ]
        },
        {
            "id": "groq",
            "name": "Groq",
            "models": [
                {"id": "qwen/qwen3-32b", "name": "Qwen3 32B", "description": "Hosted", "disableThinking": True}
            ]
        }
    ],
    "localProviders": [
        {
            "id": "qwen",
            "name": "Qwen",
            "baseUrl": "https://huggingface.co",
            "promptTemplate": "<|system|>{system}<|user|>{user}<|assistant|>",
            "models": [
                local_model("qwen-small", "Qwen Small", "2GB"),
                local_model("qwen-large", "Qwen Large", "5GB")
            ]
        },
        {
            "id": "mistral",
            "name": "Mistral",
            "baseUrl": "https://mirror.example.com",
            "promptTemplate": "[INST] {system}\n\n{user} [/INST]",
            "models": [local_model("mistral-7b", "Mistral 7B", "4GB")]
        }
    ]
}


@pytest.fixture
def catalog_data():
    return copy.deepcopy(SMALL_CATALOG)


@pytest.fixture
def catalog(catalog_data):
    return ProviderCatalog.from_dict(catalog_data)


@pytest.fixture
def registry(catalog):
    return ModelRegistry(catalog)


@pytest.fixture
def reasoning(registry):
    return ReasoningCatalog(registry)


@pytest.fixture
def resolver(reasoning):
    return ProviderResolver(reasoning)


@pytest.fixture
def default_registry():
    return ModelRegistry(load_catalog())


@pytest.fixture
def default_resolver(default_registry):
    return ProviderResolver(ReasoningCatalog(default_registry))


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def settings(storage, resolver):
    return Settings(storage, resolver)
