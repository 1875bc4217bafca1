"""Domain services for wallet and password authentication."""
