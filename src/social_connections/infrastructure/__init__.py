"""
Infrastructure Layer

Document store access, credential encryption and metrics.
Store access goes through the DocumentStore interface for testability.
"""
