"""
Adapter layer for the Tracker API.

Contains the mode-aware blob sinks (local disk / S3) that receive uploaded media.
"""
