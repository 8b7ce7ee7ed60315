# -----------------------------------------------------------------------------
# DOMAIN LAYER
# -----------------------------------------------------------------------------
# Contains the Pydantic models that define the contract between the CI
# environment (inputs, push event) and the build pipeline.
# -----------------------------------------------------------------------------

from .models import BuildConfiguration, EventCommit, PushEvent, image_tags, parse_tags

__all__ = ["BuildConfiguration", "EventCommit", "PushEvent", "image_tags", "parse_tags"]
