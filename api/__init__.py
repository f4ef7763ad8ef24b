"""
FastAPI RESTful API for book records.

This module provides a REST API for:
- Listing every book
- Creating, reading, updating and deleting single books
- Health reporting for the MongoDB backend
"""
