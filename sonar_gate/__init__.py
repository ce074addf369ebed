"""SonarQube quality gate and new-issue client."""

__version__ = "0.1.0"
