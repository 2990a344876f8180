"""
Text enhancement planning.

Works out everything needed before dictated text is sent to a reasoning
provider: whether enhancement is enabled and configured, which provider owns
the selected model, which system prompt applies and, for local models, the
fully formatted prompt. Sending the request is left to the caller.
"""

from typing import Optional
from dataclasses import dataclass
from enum import Enum
import logging

from ..models.prompts import CustomPrompts, select_system_prompt
from ..models.provider_config import get_provider_config
from ..models.reasoning import LOCAL_PROVIDER_ID, ReasoningCatalog
from ..models.registry import ModelRegistry
from ..settings.settings import Settings

# Setup logging
logger = logging.getLogger(__name__)


class PlanStatus(Enum):
    """Outcome of planning an enhancement request."""
    READY = "ready"
    EMPTY_TEXT = "empty_text"
    DISABLED = "disabled"
    NO_MODEL = "no_model"
    UNKNOWN_PROVIDER = "unknown_provider"
    MISSING_BASE_URL = "missing_base_url"
    MODEL_NOT_IN_CATALOG = "model_not_in_catalog"


@dataclass
class EnhancementPlan:
    """Everything a caller needs to send (or refuse to send) an enhancement request."""
    status: PlanStatus
    message: str
    text: str
    model: str = ""
    model_label: str = ""
    provider: str = ""
    provider_label: str = ""
    system_prompt: str = ""
    prompt: Optional[str] = None
    download_url: Optional[str] = None
    base_url: Optional[str] = None
    requires_api_key: bool = False
    has_api_key: bool = False

    @property
    def ready(self) -> bool:
        return self.status is PlanStatus.READY


class EnhancementPlanner:
    """
    Prepares enhancement requests from the current settings.

    Planning never raises for configuration problems; they are reported
    through the plan status and a user-facing message.
    """

    def __init__(
        self,
        settings: Settings,
        registry: ModelRegistry,
        reasoning: Optional[ReasoningCatalog] = None
    ):
        """
        Initialize the planner.

        Args:
            settings: Current application settings
            registry: Model registry for local model lookups
            reasoning: Reasoning view for display labels. Defaults to the
                resolver's view.
        """
        self.settings = settings
        self.registry = registry
        self.reasoning = reasoning or settings.resolver.reasoning

    def plan(self, text: str, prompts: Optional[CustomPrompts] = None) -> EnhancementPlan:
        """
        Plan the enhancement of a piece of dictated text.

        Args:
            text: Dictated text
            prompts: Prompts to use instead of the saved ones, e.g. while editing

        Returns:
            An EnhancementPlan; check `ready` before sending anything.
        """
        if not text.strip():
            return EnhancementPlan(PlanStatus.EMPTY_TEXT, "Nothing to enhance.", text)

        if not self.settings.use_reasoning_model:
            return EnhancementPlan(
                PlanStatus.DISABLED,
                "AI text enhancement is disabled. Enable it in AI Models settings.",
                text
            )

        model_id = self.settings.reasoning_model
        if not model_id:
            return EnhancementPlan(
                PlanStatus.NO_MODEL,
                "No reasoning model selected. Choose one in AI Models settings.",
                text
            )

        provider_id = self.settings.reasoning_provider
        if not provider_id:
            return EnhancementPlan(
                PlanStatus.UNKNOWN_PROVIDER,
                f"Cannot tell which provider serves '{model_id}'. Choose a model in AI Models settings.",
                text,
                model=model_id,
                model_label=model_id
            )

        config = get_provider_config(provider_id)
        model_label = self.reasoning.get_reasoning_model_label(model_id)
        plan = EnhancementPlan(
            PlanStatus.READY,
            f"Ready to enhance with {model_label}.",
            text,
            model=model_id,
            model_label=model_label,
            provider=provider_id,
            provider_label=config.label,
            system_prompt=select_system_prompt(
                text,
                self.settings.agent_name,
                prompts or self.settings.effective_prompts()
            ),
            requires_api_key=config.api_key_storage_key is not None
        )
        plan.has_api_key = bool(self.settings.api_key_for(provider_id)) if plan.requires_api_key else False

        if config.base_storage_key:
            plan.base_url = self.settings.base_url_for(provider_id)
            if not plan.base_url:
                plan.status = PlanStatus.MISSING_BASE_URL
                plan.message = f"{config.label} base URL missing. Add it in AI Models settings."
                return plan

        if provider_id == LOCAL_PROVIDER_ID:
            lookup = self.registry.get_model(model_id)
            if not lookup:
                plan.status = PlanStatus.MODEL_NOT_IN_CATALOG
                plan.message = f"Local model '{model_id}' is not in the model catalog."
                return plan
            plan.prompt = lookup.provider.format_prompt(text, plan.system_prompt)
            plan.download_url = lookup.provider.get_download_url(lookup.model)

        logger.debug(f"Planned enhancement with {provider_id}/{model_id}")
        return plan
