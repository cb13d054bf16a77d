"""VendorComply API — vendor compliance document tracking."""

__version__ = "1.0.0"
