"""Shared command execution, logging and systemd helpers."""
