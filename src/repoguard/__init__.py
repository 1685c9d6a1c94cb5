"""repoguard — branch-name and secret-pattern checks for protected branches."""

__version__ = "0.1.0"
