"""
Noteful Backend — Pydantic Request/Response Schemas
=====================================================

Public JSON uses camelCase keys (`createdAt`, `folderId`); Python code uses
snake_case attributes. Aliases are generated by `to_camel` and FastAPI
serializes responses by alias.
"""
