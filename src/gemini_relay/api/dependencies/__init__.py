"""
FastAPI dependencies for request processing.

Dependencies provide reusable logic injected into API endpoints: access to the
shared dispatcher and settings, and scoped handling of transient uploads.
"""
