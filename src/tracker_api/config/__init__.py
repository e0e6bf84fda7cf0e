"""
Configuration management for the Tracker API.

Contains the Pydantic settings object shared by the HTTP app, the CLI and
the Lambda handler, for the local-dev, aws-mock and aws-prod deployment modes.
"""
