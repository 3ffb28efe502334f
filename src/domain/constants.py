"""Domain constants for proxy account synchronization."""

DEFAULT_ACCESS_LEVEL = 0

DEFAULT_INBOUND_TAG = "ssapi"

NOISE_FLOOR_BYTES = 100

UPLINK_COUNTER_TEMPLATE = "user>>>{email}>>>traffic>>>uplink"
DOWNLINK_COUNTER_TEMPLATE = "user>>>{email}>>>traffic>>>downlink"


__all__ = [
    "DEFAULT_ACCESS_LEVEL",
    "DEFAULT_INBOUND_TAG",
    "NOISE_FLOOR_BYTES",
    "UPLINK_COUNTER_TEMPLATE",
    "DOWNLINK_COUNTER_TEMPLATE",
]
