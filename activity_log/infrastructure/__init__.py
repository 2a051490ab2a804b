"""Infrastructure adapters: storage and messaging."""
