"""Reporters — terminal, JSON, SARIF, and branch-check output."""
