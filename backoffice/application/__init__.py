"""
Application layer: use cases, editor state and wire DTOs.
"""
