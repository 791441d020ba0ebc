"""Project-wide constants for emerbridge."""  # noqa: D415

# ==============================================================================
# Node connection defaults
# ==============================================================================

DEFAULT_CLI_PATH = "emercoin-cli"
DEFAULT_RPC_USER = "rpcuser"
DEFAULT_RPC_PASSWORD = "rpcpassword"
DEFAULT_RPC_PORT = "6662"
DEFAULT_RPC_HOST = "127.0.0.1"

# ==============================================================================
# Post-processing helpers
# ==============================================================================

DEFAULT_FORMAT_COMMAND = "python3 emercoin-format.py"
DEFAULT_VALUE_COMMAND = "python3 emercoin-value.py"

# ==============================================================================
# Resource limits
# ==============================================================================

DEFAULT_MAX_CONCURRENCY = 16
DEFAULT_PROCESS_TIMEOUT_S = 300.0
DEFAULT_STAGE_TIMEOUT_S = 30.0

# ==============================================================================
# HTTP surface
# ==============================================================================

SERVICE_NAME = "emercoin-mcp-server"
DEFAULT_HTTP_PORT = 7331

_MB = 1024 * 1024
MAX_BODY_BYTES = 10 * _MB
