"""Mutating actions taken on SEP issues and pull requests."""
