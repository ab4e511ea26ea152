"""Basic importgate usage: one gateway for local files and remote URLs.

The gateway confines local reads and writes to the import directory and
returns counting streams, so progress can be shown for any location.
"""

from pathlib import Path

from importgate import GatewayConfig, RichProgressReporter, create_gateway


import_dir = Path("./import")
import_dir.mkdir(exist_ok=True)
(import_dir / "people.csv").write_text("name,age\nAlice,31\nBob,27\n")

# Same keys as the host database's configuration file
config = GatewayConfig(
    {
        "apoc.import.file.enabled": "true",
        "apoc.import.file.use_neo4j_config": "true",
        "apoc.import.file.allow_read_from_filesystem": "true",
        "dbms.directories.import": str(import_dir),
    }
)
gateway = create_gateway(config)

# Relative paths, absolute paths and file: URLs all resolve inside ./import
print(gateway.resolve("people.csv"))
print(gateway.resolve("/etc/passwd"))

# Read text with a running character count
with gateway.open_reader("people.csv") as reader:
    header = reader.readline()
    rows = reader.readlines()
    print(f"{header.strip()}: {len(rows)} rows, {reader.count} characters read")

# Write a file; the target is nested under the import directory too
with gateway.open_writer("reports/summary.txt") as writer:
    writer.write(f"{len(rows)} people\n")

# Byte streams report progress against the declared length
with RichProgressReporter() as reporter:
    callback = reporter.start_task("people.csv", 0)
    with gateway.open_input_stream("people.csv", progress=callback) as stream:
        data = stream.read()
    reporter.finish_task("people.csv")

# Remote locations use the same calls (requires network access and
# credentials where the service needs them)
# with gateway.open_reader("s3://my-bucket/people.csv") as reader: ...
# with gateway.open_reader("https://example.com/people.csv") as reader: ...
