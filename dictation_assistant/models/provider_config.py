"""Credentials and endpoints each reasoning provider needs."""

from typing import Optional, Dict
from dataclasses import dataclass


@dataclass(frozen=True)
class ProviderConfig:
    """Display label plus the settings keys (and env var) holding a provider's credentials."""
    label: str
    api_key_storage_key: Optional[str] = None
    base_storage_key: Optional[str] = None
    api_key_env: Optional[str] = None


PROVIDER_CONFIG: Dict[str, ProviderConfig] = {
    "openai": ProviderConfig("OpenAI", api_key_storage_key="openaiApiKey", api_key_env="OPENAI_API_KEY"),
    "anthropic": ProviderConfig(
        "Anthropic", api_key_storage_key="anthropicApiKey", api_key_env="ANTHROPIC_API_KEY"
    ),
    "gemini": ProviderConfig("Gemini", api_key_storage_key="geminiApiKey", api_key_env="GEMINI_API_KEY"),
    "groq": ProviderConfig("Groq", api_key_storage_key="groqApiKey", api_key_env="GROQ_API_KEY"),
    "custom": ProviderConfig(
        "Custom endpoint",
        api_key_storage_key="openaiApiKey",
        base_storage_key="cloudReasoningBaseUrl",
        api_key_env="OPENAI_API_KEY"
    ),
    "local": ProviderConfig("Local"),
}


def get_provider_config(provider_id: str) -> ProviderConfig:
    """Get a provider's config; unknown providers get a capitalised label and no credentials."""
    config = PROVIDER_CONFIG.get(provider_id)
    if config:
        return config
    return ProviderConfig(label=provider_id[:1].upper() + provider_id[1:])
