"""Domain policies package."""

from .traffic import exceeds_noise_floor

__all__ = ["exceeds_noise_floor"]
