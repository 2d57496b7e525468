"""
Enhancement Fragment Registry

Every knowledge module exposes the same narrow interface: given the
(industry, personality, language) of the prompt being composed, render one
text fragment. The composer asks the registry for all fragments at once and
never branches on module type itself.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, Optional

from src.models.business import Language, Personality
from src.models.enhancement import EnhancementConfig


@dataclass(frozen=True)
class FragmentRequest:
    """Inputs shared by every enhancement module for one composition."""
    business_type: str
    personality: Personality
    language: Language
    config: EnhancementConfig


class EnhancementModule(ABC):
    """
    A pure, stateless contributor to the meta-prompt.

    `key` doubles as the template placeholder the fragment fills
    (e.g. "INDUSTRY_CONTEXT" fills {INDUSTRY_CONTEXT}).
    """

    key: str

    @abstractmethod
    def is_enabled(self, config: EnhancementConfig) -> bool:
        """Whether this module contributes anything under the given config."""

    @abstractmethod
    def render(self, request: FragmentRequest) -> str:
        """Render the fragment. Must not perform I/O."""


class FragmentRegistry:
    """Ordered lookup from placeholder key to enhancement module."""

    def __init__(self, modules: Optional[Iterable[EnhancementModule]] = None):
        self._modules: dict[str, EnhancementModule] = {}
        for module in modules or ():
            self.register(module)

    def register(self, module: EnhancementModule) -> None:
        if module.key in self._modules:
            raise ValueError(f"Enhancement module already registered: {module.key}")
        self._modules[module.key] = module

    def get(self, key: str) -> EnhancementModule:
        return self._modules[key]

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(self._modules)

    def render_all(self, request: FragmentRequest) -> dict[str, str]:
        """
        Render every registered module.
        Disabled modules still get an entry (empty string) so their
        placeholder is always resolved.
        """
        fragments = {}
        for key, module in self._modules.items():
            if module.is_enabled(request.config):
                fragments[key] = module.render(request)
            else:
                fragments[key] = ""
        return fragments
