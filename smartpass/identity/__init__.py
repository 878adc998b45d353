"""Identity: tokens, password hashing, access guard and permissions."""
