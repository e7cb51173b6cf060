"""
Content data layer for the club website.

This package provides the collection store, typed content facades, the
remote sync client and a FastAPI application serving the data API over a
pluggable key-value backend.
"""
