"""
Provider resolution for reasoning model identifiers.

A model id typed by the user or carried over from stored settings is mapped
to the provider that serves it. Catalog entries are authoritative. Ids the
catalog does not know fall back to an ordered table of naming-convention
rules.
"""

from typing import Optional, Sequence, Tuple
from dataclasses import dataclass
import logging

from .reasoning import ReasoningCatalog, LOCAL_PROVIDER_ID

# Setup logging
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HeuristicRule:
    """Maps ids containing any `include` substring and no `exclude` substring to a provider."""
    provider: str
    include: Tuple[str, ...]
    exclude: Tuple[str, ...] = ()

    def matches(self, model_id: str) -> bool:
        """Check whether a model id follows this rule's naming convention."""
        if any(pattern in model_id for pattern in self.exclude):
            return False
        return any(pattern in model_id for pattern in self.include)


# Order matters: the groq rule must run before the generic local rule
DEFAULT_HEURISTIC_RULES: Tuple[HeuristicRule, ...] = (
    HeuristicRule("anthropic", ("claude",)),
    HeuristicRule("gemini", ("gemini",), exclude=("gemma",)),
    HeuristicRule("openai", ("gpt-4", "gpt-5"), exclude=("gpt-oss",)),
    HeuristicRule(
        "groq",
        ("qwen/", "openai/", "llama-3.1-8b-instant", "llama-3.3-", "mixtral-", "gemma2-")
    ),
    HeuristicRule(LOCAL_PROVIDER_ID, ("qwen", "llama", "mistral", "gpt-oss-20b-mxfp4")),
)


class ProviderResolver:
    """
    Resolves which provider owns a reasoning model id.

    Resolution never fails: an empty string means the provider is unknown
    and the caller has to ask the user to pick a model explicitly.
    """

    def __init__(
        self,
        reasoning: ReasoningCatalog,
        rules: Sequence[HeuristicRule] = DEFAULT_HEURISTIC_RULES
    ):
        """
        Initialize the resolver.

        Args:
            reasoning: Reasoning view consulted before any heuristic
            rules: Ordered fallback rules, first match wins
        """
        self.reasoning = reasoning
        self.rules = tuple(rules)

    def resolve_provider(self, model_id: str) -> str:
        """
        Get the provider id for a model id.

        Args:
            model_id: Model identifier, possibly empty or unknown

        Returns:
            The provider id, or "" if neither the catalog nor a rule matches.
        """
        model = self.reasoning.find_model(model_id)
        if model:
            return model.provider

        provider = self.resolve_by_heuristic(model_id)
        if provider:
            logger.debug(f"Model {model_id!r} not in catalog, guessed provider {provider}")
        elif model_id:
            logger.debug(f"No provider found for model {model_id!r}")
        return provider

    def resolve_by_heuristic(self, model_id: str) -> str:
        """Apply only the fallback rules to a model id."""
        for rule in self.rules:
            if rule.matches(model_id):
                return rule.provider
        return ""

    def with_rule(self, rule: HeuristicRule, before: Optional[str] = None) -> "ProviderResolver":
        """
        Create a resolver with an extra fallback rule.

        Args:
            rule: Rule to add
            before: Insert ahead of the first rule for this provider id.
                Appended at the end when None or when no rule has that provider.

        Returns:
            A new resolver sharing this one's reasoning view.
        """
        rules = list(self.rules)
        index = len(rules)
        if before is not None:
            for i, existing in enumerate(rules):
                if existing.provider == before:
                    index = i
                    break
        rules.insert(index, rule)
        return ProviderResolver(self.reasoning, rules)
