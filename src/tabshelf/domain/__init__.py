"""Domain layer - tab library business logic."""
