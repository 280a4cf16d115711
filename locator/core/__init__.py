"""Core configuration, logging and domain logic."""
