"""
APPLICATION LAYER - Use Cases & Orchestration

This layer contains:
- commands/  → Write operations (CQRS)
- queries/   → Read operations (CQRS)
- dto/       → Data Transfer Objects (camelCase on the wire)
- common/    → Shared interfaces (Command, Query base classes) and lookups

Rules:
- No HTTP/framework code here
- Coordinates entities, repositories, realtime broadcast and image storage
"""
