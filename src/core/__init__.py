# -----------------------------------------------------------------------------
# CORE LAYER
# -----------------------------------------------------------------------------
# The business logic of the image builder:
# - Walker: changed file -> nearest Dockerfile directory
# - ChangeSetResolver: push commits -> deduplicated build plan
# - BuildOrchestrator: login, buildx provisioning and per-image builds
# -----------------------------------------------------------------------------

from .walker import BUILD_DESCRIPTOR, ResolutionError, find_build_context
from .resolver import ChangeSetResolver, load_push_event
from .orchestrator import BuildOrchestrator

__all__ = [
    "BUILD_DESCRIPTOR", "ResolutionError", "find_build_context",
    "ChangeSetResolver", "load_push_event",
    "BuildOrchestrator",
]
