"""Hike Tracker: server-rendered hike log with htmx fragment swaps."""
