"""Domain models and identifiers for Larder."""
