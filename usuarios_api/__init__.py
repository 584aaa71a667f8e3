"""
Usuarios API - gestión de usuarios con autenticación por token
"""

__version__ = "1.0.0"
