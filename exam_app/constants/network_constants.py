"""Network configuration constants for the local exam API."""

DEFAULT_HOST: str = "127.0.0.1"
DEFAULT_PORT: int = 8000
