"""
DOMAIN LAYER - The heart of the chat backend

This layer contains:
- Entities: Business objects with identity (User, Conversation, Membership,
  Message, Reaction, TypingIndicator)
- Value Objects: Immutable types (UserId, ConversationId, MessageId, ReadReceipts)
- Ports: Interfaces that infrastructure implements (repositories, locks)
- Services: Pure domain logic (no I/O)
- Exceptions: Domain-specific errors

RULES:
1. NO framework imports (no FastAPI, Prisma, Pydantic, etc.)
2. NO I/O operations (no database, no HTTP, no file system)
3. Only depends on Python stdlib
"""
