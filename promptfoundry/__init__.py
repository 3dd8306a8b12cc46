"""PromptFoundry: license sidecar, catalog tooling and client-side gate."""

__version__ = "1.0.0"
