"""Tests for the unified reasoning model view."""

from dictation_assistant.models.catalog import ModelDefinition
from dictation_assistant.models.reasoning import (
    LOCAL_PROVIDER_ID,
    ReasoningCatalog,
    build_reasoning_providers
)
from dictation_assistant.models.registry import ModelProvider


class TestBuildReasoningProviders:
    """Projection of cloud and local providers."""

    def test_cloud_providers_then_local_bucket(self, registry):
        providers = build_reasoning_providers(registry)
        assert list(providers) == ["openai", "anthropic", "groq", LOCAL_PROVIDER_ID]

    def test_cloud_models_copied_through(self, registry):
        openai = build_reasoning_providers(registry)["openai"]
        assert openai.name == "OpenAI"
        assert [(m.value, m.label, m.description) for m in openai.models] == [
            ("gpt-5", "GPT-5", "Flagship"),
            ("gpt-5-mini", "GPT-5 Mini", "Small"),
        ]

    def test_local_bucket_merges_all_local_providers(self, registry):
        local = build_reasoning_providers(registry)[LOCAL_PROVIDER_ID]
        assert local.name == "Local AI"
        assert [m.value for m in local.models] == ["qwen-small", "qwen-large", "mistral-7b"]
        assert local.models[0].description == "Qwen Small description (2GB)"


class TestReasoningCatalog:
    """Flattened listing and labels."""

    def test_all_reasoning_models(self, reasoning):
        models = reasoning.get_all_reasoning_models()
        assert [m.value for m in models] == [
            "gpt-5",
            "gpt-5-mini",
            "claude-sonnet-4-5",
            "qwen/qwen3-32b",
            "qwen-small",
            "qwen-large",
            "mistral-7b",
        ]
        assert models[2].provider == "anthropic"
        assert models[2].full_label == "Anthropic Claude Sonnet 4.5"
        assert models[-1].provider == LOCAL_PROVIDER_ID

    def test_label_on_hit(self, reasoning):
        assert reasoning.get_reasoning_model_label("gpt-5-mini") == "OpenAI GPT-5 Mini"
        assert reasoning.get_reasoning_model_label("mistral-7b") == "Local AI Mistral 7B"

    def test_label_on_miss_is_passthrough(self, reasoning):
        assert reasoning.get_reasoning_model_label("totally-unknown") == "totally-unknown"
        assert reasoning.get_reasoning_model_label("") == ""

    def test_providers_property_returns_copy(self, reasoning):
        reasoning.providers.clear()
        assert LOCAL_PROVIDER_ID in reasoning.providers

    def test_view_rebuilds_after_registration(self, registry):
        reasoning = ReasoningCatalog(registry)
        assert reasoning.find_model("added") is None

        model = ModelDefinition(
            id="added",
            name="Added",
            size="1GB",
            size_bytes=1,
            description="Runtime model",
            file_name="added.gguf",
            quantization="Q8_0",
            context_length=1024,
            hf_repo="test/added"
        )
        registry.register_provider(ModelProvider("extra", "Extra", "https://x", [model], "{system}{user}"))

        found = reasoning.find_model("added")
        assert found.provider == LOCAL_PROVIDER_ID
        assert found.description == "Runtime model (1GB)"
