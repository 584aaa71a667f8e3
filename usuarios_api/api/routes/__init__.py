"""
API Routes Package
"""

from .auth import router as auth_router
from .usuarios import router as usuarios_router
