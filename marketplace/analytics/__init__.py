"""
In-process search analytics.

Responsibilities:
- Record one event per match or offers search.
- Summarise recorded events for the admin analytics endpoint.
"""
