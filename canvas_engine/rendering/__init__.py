"""Rendering surface and viewport math."""
