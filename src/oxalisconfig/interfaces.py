"""Core value types shared by the configuration and statistics layers."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class OperationalMode(Enum):
    """Mode the access point runs in."""
    PRODUCTION = "PRODUCTION"
    TEST = "TEST"


class PkiVersion(Enum):
    """PEPPOL PKI generation used for certificate validation."""
    V1 = "V1"
    V2 = "V2"
    T = "T"  # Test certificates


class Direction(Enum):
    """Direction of a transmitted message relative to this access point."""
    IN = "IN"
    OUT = "OUT"


class StatisticsGranularity(Enum):
    """Period size used when aggregating raw statistics."""
    YEAR = "YEAR"
    MONTH = "MONTH"
    DAY = "DAY"
    HOUR = "HOUR"


@dataclass(frozen=True)
class RawStatistics:
    """A single message transmission event.

    Attributes:
        access_point_identifier: Identifier of this access point
        direction: Inbound or outbound
        timestamp: When the message was transmitted
        document_type_id: PEPPOL document type identifier
        process_id: PEPPOL process identifier
        sender: Sender participant identifier
        receiver: Receiver participant identifier
        channel_id: Optional channel the message arrived on
    """
    access_point_identifier: str
    direction: Direction
    timestamp: datetime
    document_type_id: str
    process_id: str
    sender: str
    receiver: str
    channel_id: Optional[str] = None


@dataclass(frozen=True)
class StatisticsRow:
    """Aggregated message count for one period bucket."""
    access_point_identifier: str
    direction: Direction
    period: str
    document_type_id: str
    process_id: str
    channel_id: Optional[str]
    count: int
