"""
Base declarativa para todos los modelos
"""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
