"""Services package."""
from src.services.caller_context_service import CallerContextService
from src.services.generation_client import GenerationClient
from src.services.prompt_generator import generate_prompts
from src.services.regeneration_service import RegenerationService, get_trigger_type
from src.services.result_packager import estimate_token_count, package_prompts

__all__ = [
    "CallerContextService",
    "GenerationClient",
    "generate_prompts",
    "RegenerationService",
    "get_trigger_type",
    "estimate_token_count",
    "package_prompts",
]
