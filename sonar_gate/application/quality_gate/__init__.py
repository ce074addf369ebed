"""Quality gate use case."""
