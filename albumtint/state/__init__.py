"""Observable colour state for the player session."""

from .resolution import ColorResolutionState, ResolutionState, is_valid_image_url

__all__ = ["ColorResolutionState", "ResolutionState", "is_valid_image_url"]
