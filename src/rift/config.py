# src/rift/config.py

# Matches directives like: #include "relative/path.txt"
DEFAULT_INCLUDE_REGEX = r'#include "([\w./%]*)"'

DEFAULT_MAX_DEPTH = 5

DEFAULT_IGNORE_FILE = ".riftignore"

DEFAULT_IGNORE_PATTERNS = [
    "# Default ignore patterns",
    ".git/",
    "__pycache__/",
    ".DS_Store",
    DEFAULT_IGNORE_FILE,
]

# Bytes sniffed for NUL when deciding whether a source is binary
BINARY_SNIFF_BYTES = 1024
