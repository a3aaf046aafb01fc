"""
Persistence schemas

The request tree is stored as plain files; this package only holds the
pydantic models describing them.
"""
