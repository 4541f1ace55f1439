"""Request/response models for external callers."""
