"""
Shared tool infrastructure: the BaseTool wrapper and HTTP client factory.
"""
