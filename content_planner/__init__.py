"""Content Planner API."""
