"""relman - Tauri release manifest tooling."""

__version__ = "0.1.0"
