"""
FastAPI application layer for gemini-relay.

This module exposes the HTTP endpoints that accept prompts, images and
documents and hand them to the inference pipeline.
"""
