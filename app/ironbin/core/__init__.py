"""Core infrastructure for ironbin: XDG paths and CLI colors."""
