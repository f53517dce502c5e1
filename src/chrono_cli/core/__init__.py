"""Core utilities shared across chrono modules."""
