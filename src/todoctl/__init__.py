"""todoctl: file-backed todo store for agentic coding assistants."""

__version__ = "0.1.0"
