"""
Member Network Platform
A membership-and-opportunity networking backend.

Architecture:
- Relational store (PostgreSQL/SQLite): users, opportunities, applications, content
- Document store (MongoDB): the same entities for document-store deployments
- One repository interface in front of both
"""

__version__ = "1.0.0"
