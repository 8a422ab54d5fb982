"""Infrastructure layer: metrics and error tracking."""
