"""Password hashing, tokens, and the current-user dependency."""
