"""
Disposal Agent Service: resolves an item description to a jurisdiction's
disposal category with a blended confidence score.
"""
from .app import DisposalAgentApp
from .config import DisposalAgentConfig
from .config_loader import load_config_from_env
from .models import DisposalCategory, Material, MatchResult, Provider
from .schemas import ResolutionResponse, ResolveRequest, ScanOutput

__all__ = [
    "DisposalAgentApp",
    "DisposalAgentConfig",
    "load_config_from_env",
    "DisposalCategory",
    "Material",
    "MatchResult",
    "Provider",
    "ResolutionResponse",
    "ResolveRequest",
    "ScanOutput",
]
