"""Remote playlist providers.

Only Spotify's web player (pathfinder) API is implemented.
"""
