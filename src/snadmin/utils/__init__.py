"""Shared utilities for snadmin."""
