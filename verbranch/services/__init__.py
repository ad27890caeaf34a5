"""Versioning pipeline stages: version resolution, branch and PR reconciliation."""
