"""Canary and stable GitHub releases with generated release notes."""
