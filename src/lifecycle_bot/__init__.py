"""Lifecycle Bot - close and reopen GitHub issues and pull requests from comments."""

__version__ = "1.0.0"
__description__ = "GitHub bot handling /close and /reopen comments"

__all__ = ["__version__"]
