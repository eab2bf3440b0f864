"""Core application of the optica backend.

Models, request validation, authorization gates, lifecycle observers and
the HTTP views of the ``/api/v1/`` surface.
"""
