"""Data model and supporting pieces of a secrets scanner: locations, Git URLs, provenance, matches, statistics and a GitHub client."""

__version__ = "0.25.0.dev0"