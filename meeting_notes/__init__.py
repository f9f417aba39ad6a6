"""
Meeting Notes.

- backend/: REST API, services, repositories, database, configuration
- cli.py: Command-line entry point (server, migrations, seed data)
"""
