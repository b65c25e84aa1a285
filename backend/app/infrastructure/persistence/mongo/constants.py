from enum import Enum


class ConnectionState(str, Enum):
    PENDING = "PENDING"
    CONNECTED = "CONNECTED"
    FAILED = "FAILED"
    CLOSED = "CLOSED"


# Fixed driver options; not exposed through settings.
DRIVER_OPTIONS = {
    "tz_aware": True,
    "uuidRepresentation": "standard",
}
