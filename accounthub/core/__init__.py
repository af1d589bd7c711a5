"""Core configuration, logging, security and error taxonomy."""
