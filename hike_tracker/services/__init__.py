"""Rendering and view logic. Talks to the store only through TrackerStore."""
