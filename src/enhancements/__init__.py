"""
Knowledge modules merged into the meta-prompt.
"""
from .caller_context import CallerContextEnhancement
from .error_templates import ErrorTemplateEnhancement
from .few_shot import FewShotEnhancement
from .industry import IndustryEnhancement
from .registry import EnhancementModule, FragmentRegistry, FragmentRequest
from .sentiment import SentimentEnhancement


def default_registry() -> FragmentRegistry:
    """Registry with every built-in module, in template order."""
    return FragmentRegistry([
        IndustryEnhancement(),
        SentimentEnhancement(),
        FewShotEnhancement(),
        ErrorTemplateEnhancement(),
        CallerContextEnhancement(),
    ])


__all__ = [
    "EnhancementModule",
    "FragmentRegistry",
    "FragmentRequest",
    "default_registry",
    "IndustryEnhancement",
    "SentimentEnhancement",
    "FewShotEnhancement",
    "ErrorTemplateEnhancement",
    "CallerContextEnhancement",
]
