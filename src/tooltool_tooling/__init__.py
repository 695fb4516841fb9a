"""Release tooling for the tool-tool Rust workspace: version bump/tag, revision string, commit gate, release build."""

__version__ = "0.1.0"
