"""Configuration keys understood by importgate.

The names follow the host database's own configuration files so that an
existing apoc.conf or neo4j.conf can be loaded without translation.
"""

from __future__ import annotations


IMPORT_DIRECTORY = "dbms.directories.import"
IMPORT_FILE_ENABLED = "apoc.import.file.enabled"
ALLOW_READ_FROM_FILESYSTEM = "apoc.import.file.allow_read_from_filesystem"
USE_NEO4J_CONFIG = "apoc.import.file.use_neo4j_config"
HOME_DIRECTORY = "unsupported.dbms.directories.neo4j_home"
LOGS_DIRECTORY = "dbms.directories.logs"
METRICS_DIRECTORY = "dbms.directories.metrics"

# Import directory used for writes when import semantics are on but no
# directory is configured.
DEFAULT_IMPORT_DIRECTORY = "import"

# Every dbms.directories.* setting of the host. They usually share a root,
# but each one can be configured onto a different device.
NEO4J_DIRECTORY_SETTINGS = (
    "dbms.directories.certificates",
    "dbms.directories.data",
    IMPORT_DIRECTORY,
    "dbms.directories.lib",
    LOGS_DIRECTORY,
    "dbms.directories.plugins",
    "dbms.directories.run",
    "dbms.directories.tx_log",
    HOME_DIRECTORY,
)
