"""Transaction table scanning CLI suite."""
