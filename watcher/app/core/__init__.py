"""Core shared values."""
SERVICE_NAME = "watcher"
