"""Core domain module for importgate.

This module contains the location rules, containment, counting streams and
port definitions. It depends on no transport library and can be tested in
isolation.
"""

from importgate.core.containment import resolve_location
from importgate.core.locations import classify_location, is_hdfs, is_local_like
from importgate.core.models import LocationKind, OperationalDirectory, StreamConnection
from importgate.core.ports import ConfigPort, ProgressCallback, TransportPort


__all__ = [
    "ConfigPort",
    "LocationKind",
    "OperationalDirectory",
    "ProgressCallback",
    "StreamConnection",
    "TransportPort",
    "classify_location",
    "is_hdfs",
    "is_local_like",
    "resolve_location",
]
