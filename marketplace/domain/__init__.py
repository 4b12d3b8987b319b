"""
DOMAIN LAYER

This layer contains:
- Entities: Business objects with identity (User, Product, Chat, ChatMessage)
- Value Objects: Immutable, canonicalised ids (UserId, ProductId, ChatId, ...)
- Ports: Interfaces/abstractions that infrastructure implements
- Services: Pure domain logic (role classification, room naming, passwords)
- Exceptions: Domain-specific errors

RULES:
1. NO framework imports (no FastAPI, Prisma, Pydantic, etc.)
2. NO I/O operations (no database, no HTTP, no file system)
3. Only depends on Python stdlib
"""
