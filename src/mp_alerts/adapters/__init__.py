"""Adapters – concrete delivery collaborators."""
