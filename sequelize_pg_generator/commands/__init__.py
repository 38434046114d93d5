"""CLI commands for sequelize-pg-generator."""
