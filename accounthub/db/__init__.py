"""Persistence layer: engine, sessions, repositories and update helpers."""
