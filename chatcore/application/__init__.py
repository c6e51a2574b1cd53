"""
APPLICATION LAYER - Use Cases & Orchestration

This layer contains:
- commands/  → Write operations (CQRS)
- queries/   → Read operations (CQRS)
- services/  → Identity resolution shared by every handler
- dto/       → Caller-shaped projections returned to the UI
- common/    → Shared interfaces (Command, Query base classes) and guards

Rules:
- Depends on Domain layer only
- No HTTP/framework code here
- Coordinates entities, repositories and locks
"""
