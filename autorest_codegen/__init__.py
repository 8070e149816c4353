"""AutoRest codegen orchestrator for the Java SDK monorepo."""

__version__ = "0.1.0"
