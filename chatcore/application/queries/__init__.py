"""Read operations (CQRS queries). Anonymous callers get empty results, never errors."""
