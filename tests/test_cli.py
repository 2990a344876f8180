"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from dictation_assistant.main import main


@pytest.fixture
def invoke(tmp_path):
    runner = CliRunner()
    settings_file = tmp_path / "settings.json"

    def _invoke(*args):
        return runner.invoke(
            main,
            ["--settings-file", str(settings_file), *args],
            env={"COLUMNS": "200"}
        )

    _invoke.settings_file = settings_file
    return _invoke


class TestModelCommands:
    """Catalog inspection commands."""

    def test_resolve(self, invoke):
        result = invoke("resolve", "claude-sonnet-4-5")
        assert result.exit_code == 0
        assert result.output.strip() == "anthropic"

    def test_resolve_by_heuristic(self, invoke):
        assert invoke("resolve", "llama-3.3-70b-specdec").output.strip() == "groq"

    def test_resolve_unknown(self, invoke):
        result = invoke("resolve", "totally-unknown-model-xyz")
        assert result.exit_code == 1
        assert "No provider found" in result.output

    def test_label(self, invoke):
        assert invoke("label", "gpt-5").output.strip() == "OpenAI GPT-5"
        assert invoke("label", "not-a-model").output.strip() == "not-a-model"

    def test_download_url(self, invoke):
        result = invoke("download-url", "qwen2.5-7b-instruct-q5_k_m")
        assert result.exit_code == 0
        assert result.output.strip() == (
            "https://huggingface.co/Qwen/Qwen2.5-7B-Instruct-GGUF/resolve/main/qwen2.5-7b-instruct-q5_k_m.gguf"
        )

    def test_download_url_for_cloud_model(self, invoke):
        result = invoke("download-url", "gpt-5")
        assert result.exit_code == 1

    def test_models_filtered_by_provider(self, invoke):
        result = invoke("models", "--provider", "anthropic")
        assert result.exit_code == 0
        assert "claude-sonnet-4-5" in result.output
        assert "gpt-5" not in result.output

    def test_transcription_models(self, invoke):
        result = invoke("transcription-models", "groq")
        assert result.exit_code == 0
        assert "whisper-large-v3-turbo" in result.output

    def test_unknown_transcription_provider(self, invoke):
        assert invoke("transcription-models", "nobody").exit_code == 1

    def test_whisper_models(self, invoke):
        result = invoke("whisper-models")
        assert result.exit_code == 0
        assert "turbo" in result.output

    def test_custom_catalog(self, invoke, tmp_path, catalog_data):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps(catalog_data), encoding="utf-8")
        result = invoke("--catalog", str(path), "label", "qwen-small")
        assert result.output.strip() == "Local AI Qwen Small"

    def test_corrupt_catalog(self, invoke, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text("{oops", encoding="utf-8")
        result = invoke("--catalog", str(path), "models")
        assert result.exit_code == 1
        assert "not valid JSON" in result.output


class TestFormatPrompt:
    """Rendering local prompts."""

    def test_template(self, invoke):
        result = invoke("format-prompt", "hello", "--template", "A{system}B{user}", "--system", "S")
        assert result.exit_code == 0
        assert result.output == "ASBhello\n"

    def test_model_template(self, invoke):
        result = invoke("format-prompt", "hello", "--model", "mistral-7b-instruct-v0.3-q4_k_m", "--system", "S")
        assert result.output == "<s>[INST] S\n\nhello [/INST]\n"

    def test_requires_exactly_one_source(self, invoke):
        assert invoke("format-prompt", "hello").exit_code == 2
        assert invoke("format-prompt", "hello", "--model", "x", "--template", "{user}").exit_code == 2


class TestSettingsCommands:
    """Reading and writing persisted settings."""

    def test_set_then_get(self, invoke):
        assert invoke("settings", "set", "reasoning_model", "claude-sonnet-4-5").exit_code == 0
        assert invoke("settings", "get", "reasoning_model").output.strip() == "claude-sonnet-4-5"
        assert invoke("settings", "get", "reasoning_provider").output.strip() == "anthropic"

        stored = json.loads(invoke.settings_file.read_text(encoding="utf-8"))
        assert stored == {"reasoningModel": "claude-sonnet-4-5"}

    def test_camel_case_keys(self, invoke):
        invoke("settings", "set", "agentName", "Jarvis")
        assert invoke("settings", "get", "agent_name").output.strip() == "Jarvis"
        assert invoke("settings", "get", "reasoningProvider").exit_code == 0

    def test_boolean_values_are_decoded(self, invoke):
        invoke("settings", "set", "use_local_whisper", "garbage")
        assert invoke("settings", "get", "use_local_whisper").output.strip() == "false"
        invoke("settings", "set", "use_reasoning_model", "garbage")
        assert invoke("settings", "get", "use_reasoning_model").output.strip() == "true"

    def test_derived_setting_cannot_be_set(self, invoke):
        result = invoke("settings", "set", "reasoning_provider", "openai")
        assert result.exit_code == 1
        assert "derived" in result.output
        assert not invoke.settings_file.exists()

    def test_unknown_setting(self, invoke):
        result = invoke("settings", "get", "volume")
        assert result.exit_code == 1
        assert "Unknown setting: volume" in result.output

    def test_reset(self, invoke):
        invoke("settings", "set", "whisper_model", "large")
        assert invoke("settings", "reset", "whisper_model").exit_code == 0
        assert invoke("settings", "get", "whisper_model").output.strip() == "base"

    def test_show(self, invoke):
        invoke("settings", "set", "openai_api_key", "sk-very-secret-key")
        result = invoke("settings", "show")
        assert result.exit_code == 0
        assert "reasoning_provider" in result.output
        assert "sk-very-secret-key" not in result.output

    def test_custom_prompts(self, invoke):
        prompts = json.dumps({"agent": "Agent {{agentName}}", "regular": "Keep it short"})
        assert invoke("settings", "set", "custom_prompts", prompts).exit_code == 0
        assert json.loads(invoke("settings", "get", "custom_prompts").output) == {
            "agent": "Agent {{agentName}}",
            "regular": "Keep it short",
        }

    def test_malformed_custom_prompts_keep_saved_ones(self, invoke):
        prompts = json.dumps({"agent": "Agent", "regular": "Keep it short"})
        invoke("settings", "set", "custom_prompts", prompts)

        result = invoke("settings", "set", "custom_prompts", "{bad")
        assert result.exit_code == 1
        assert "Invalid value for setting custom_prompts" in result.output
        assert "updated" not in result.output

        stored = json.loads(invoke.settings_file.read_text(encoding="utf-8"))
        assert json.loads(stored["customPrompts"])["regular"] == "Keep it short"

    def test_unknown_model_warns(self, invoke):
        result = invoke("settings", "set", "reasoning_model", "totally-unknown-model-xyz")
        assert result.exit_code == 0
        assert "no provider is known" in result.output


class TestCheck:
    """Planning enhancement from the command line."""

    def test_not_ready_without_model(self, invoke):
        result = invoke("check", "hello")
        assert result.exit_code == 1
        assert "No reasoning model selected" in result.output

    def test_ready_local_model(self, invoke):
        invoke("settings", "set", "reasoning_model", "qwen2.5-3b-instruct-q5_k_m")
        result = invoke("check", "hello there")
        assert result.exit_code == 0
        assert "Enhancement Plan" in result.output
        assert "hello there" in result.output
