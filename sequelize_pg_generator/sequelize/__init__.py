"""Sequelize code generation for sequelize-pg-generator.

Renders model descriptors as JavaScript or TypeScript model definitions and
the association index as a relations module.
"""

from .generator import SequelizeCodeGenerator

__all__ = [
    "SequelizeCodeGenerator",
]
