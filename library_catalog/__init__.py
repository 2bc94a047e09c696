"""Library catalog service.

A CRUD HTTP/JSON API over categories, authors, users and books, with field
validation, pagination and role-based access control.
"""

__version__ = "0.1.0"
