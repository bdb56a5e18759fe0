"""Visual regression testing toolkit: comparison results, storage key layout, git-based keys and notifications."""

__version__ = "0.0.1"