"""Infrastructure utilities (logging, HTTP middleware)."""
