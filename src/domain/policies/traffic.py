"""Traffic accounting policies."""

from src.domain.constants import NOISE_FLOOR_BYTES
from src.domain.models.accounts import TrafficSample


def exceeds_noise_floor(
    sample: TrafficSample,
    floor: int = NOISE_FLOOR_BYTES,
) -> bool:
    """Return True when a sample is worth writing to the source of truth.

    Args:
        sample: Drained traffic for one account.
        floor: Byte count either direction must exceed.

    Returns:
        bool: Whether download or upload is strictly above the floor.
    """
    return sample.download > floor or sample.upload > floor


__all__ = ["exceeds_noise_floor"]
