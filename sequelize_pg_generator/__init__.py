"""Sequelize model generator for PostgreSQL databases."""

__version__ = "0.0.1"
PACKAGE_NAME = "sequelize-pg-generator"
