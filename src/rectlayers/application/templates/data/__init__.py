"""Configuration templates bundled as package data."""
