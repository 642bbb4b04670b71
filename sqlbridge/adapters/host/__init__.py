"""Host database adapter for sqlbridge."""

from sqlbridge.adapters.host.config import HostConfig, HostConnectionParams
from sqlbridge.adapters.host.driver import HostConnection, QueryLogEntry

__all__ = ("HostConfig", "HostConnection", "HostConnectionParams", "QueryLogEntry")
