"""
Orchestration layer: runs resolution stages in order for each query.
"""
from .resolution_orchestrator import ResolutionOrchestrator, deduplicate

__all__ = [
    "ResolutionOrchestrator",
    "deduplicate",
]
