"""Smart Slots - ranked start-time recommendations for tutoring sessions."""

__version__ = "0.1.0"
