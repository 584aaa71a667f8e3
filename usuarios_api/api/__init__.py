"""
API package - routers, schemas and dependencies
"""
