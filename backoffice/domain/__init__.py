"""
Domain layer: contract billing items, movements and the rules governing them.
"""
