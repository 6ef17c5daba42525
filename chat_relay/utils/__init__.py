"""Configuration, logging and service caching utilities."""
