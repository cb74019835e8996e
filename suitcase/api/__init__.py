"""
API Routers Package

FastAPI routers for the reading assistant capabilities.
"""
