"""Release tooling: version naming and cherry-pick notifications."""

__version__ = "0.1.0"
