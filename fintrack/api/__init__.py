"""
HTTP API for FinTrack.

FastAPI application exposing the calculation engines.
"""
