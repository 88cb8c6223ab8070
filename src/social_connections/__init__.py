"""
Social Connections

Document-store persistence for users' linked accounts on external
providers (social networks, OAuth services), with per-provider
ranking of primary and secondary connections.
"""

__version__ = "0.1.0"
