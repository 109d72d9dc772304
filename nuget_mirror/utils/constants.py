"""
Central constants for the NuGet Mirror package.

This module consolidates all constants used throughout the codebase
to eliminate magic numbers and strings.
"""

# ============================================================================
# NuGet V3 Protocol
# ============================================================================

# Service index resource types, most preferred first
PACKAGE_BASE_ADDRESS_TYPES = ("PackageBaseAddress/3.0.0",)
PACKAGE_PUBLISH_TYPES = ("PackagePublish/2.0.0",)

# Header carrying the API key on publish
API_KEY_HEADER = "X-NuGet-ApiKey"

# Multipart field name the publish endpoint expects
PUBLISH_FORM_FIELD = "package"

# File extension for package artifacts
NUPKG_EXTENSION = ".nupkg"

# ============================================================================
# API and Network Constants
# ============================================================================

# Default timeout for listing and download requests (seconds)
DEFAULT_TIMEOUT = 100

# Timeout for a single publish call (seconds)
DEFAULT_PUBLISH_TIMEOUT = 600

# Streaming chunk size for artifact downloads (bytes)
DOWNLOAD_CHUNK_SIZE = 65536

# Listing retry policy: attempts, first delay (seconds) and multiplier
LIST_MAX_ATTEMPTS = 3
LIST_INITIAL_BACKOFF = 1.0
LIST_BACKOFF_MULTIPLIER = 2.0

# Versions transferred at once (1 keeps destination push order strict)
DEFAULT_MAX_WORKERS = 1

# ============================================================================
# Exit Codes
# ============================================================================

EXIT_SUCCESS = 0
EXIT_GENERAL_ERROR = 1  # Needs operator intervention
EXIT_RETRYABLE_ERROR = 75  # EX_TEMPFAIL: safe to just rerun
EXIT_USER_INTERRUPT = 130  # User pressed Ctrl+C

# ============================================================================
# Default Paths and Environment
# ============================================================================

DEFAULT_CONFIG_PATH = "~/.config/nuget-mirror/feeds.toml"
CONFIG_ENV_VAR = "NUGET_MIRROR_CONFIG"
API_KEY_ENV_VAR = "NUGET_MIRROR_API_KEY"

# Suffixes treated as NuGet.Config XML rather than TOML
NUGET_CONFIG_SUFFIXES = (".config", ".xml")

# ============================================================================
# Logging and Display Constants
# ============================================================================

# Width for separator lines in console output
SEPARATOR_WIDTH = 80


__all__ = [
    # NuGet protocol
    "PACKAGE_BASE_ADDRESS_TYPES",
    "PACKAGE_PUBLISH_TYPES",
    "API_KEY_HEADER",
    "PUBLISH_FORM_FIELD",
    "NUPKG_EXTENSION",
    # API and Network
    "DEFAULT_TIMEOUT",
    "DEFAULT_PUBLISH_TIMEOUT",
    "DOWNLOAD_CHUNK_SIZE",
    "LIST_MAX_ATTEMPTS",
    "LIST_INITIAL_BACKOFF",
    "LIST_BACKOFF_MULTIPLIER",
    "DEFAULT_MAX_WORKERS",
    # Exit Codes
    "EXIT_SUCCESS",
    "EXIT_GENERAL_ERROR",
    "EXIT_RETRYABLE_ERROR",
    "EXIT_USER_INTERRUPT",
    # Paths and Environment
    "DEFAULT_CONFIG_PATH",
    "CONFIG_ENV_VAR",
    "API_KEY_ENV_VAR",
    "NUGET_CONFIG_SUFFIXES",
    # Display
    "SEPARATOR_WIDTH",
]
