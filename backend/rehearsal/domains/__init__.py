"""Domain services for practice sessions."""
