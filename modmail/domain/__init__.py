"""Domain layer — pure Python, no framework dependencies."""
