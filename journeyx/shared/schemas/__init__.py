"""Common base models."""

from journeyx.shared.schemas.base import CamelModel

__all__ = ["CamelModel"]
