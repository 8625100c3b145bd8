"""Package-wide constants.

Defaults for talking to a local SpiceDB instance and the CLI's exit codes.
"""

# SpiceDB connection defaults
DEFAULT_ENDPOINT = "localhost:50051"
DEFAULT_PRESHARED_KEY = "somerandomkeyhere"
DEFAULT_CHECK_TIMEOUT_SECONDS = 10.0

# Environment variables prefix for Settings
ENV_PREFIX = "SPICECHECK_"

# Separator between object type and object id ("document:readme")
REFERENCE_SEPARATOR = ":"

# CLI exit codes, one per outcome kind
EXIT_GRANTED = 0
EXIT_DENIED = 1
EXIT_INDETERMINATE = 2
EXIT_UNRECOGNIZED = 3
EXIT_FAILED = 4
EXIT_USAGE = 64  # EX_USAGE
