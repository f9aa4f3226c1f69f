"""Reference data and merchant rules for the generator."""
