"""Infrastructure - database session management and logging setup."""
