"""verbranch: create and maintain semantic versioning branches and their pull requests."""

__version__ = "0.1.0"
