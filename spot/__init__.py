"""
Spot - Application state core for a Spotify client.
"""
