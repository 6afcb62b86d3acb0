"""Campaign Guard: content moderation and trust scoring for fundraising campaigns."""

__version__ = "0.1.0"
