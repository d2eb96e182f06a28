"""
Domain services for the contract billing back office.

Submodules are imported explicitly (``formatting``, ``change_detection``,
``ordering``); the models depend on ``formatting``, so nothing is
re-exported here.
"""
