"""
INFRASTRUCTURE LAYER - Adapters for domain ports

- persistence/memory → in-process document store (development, tests)
- persistence/prisma → PostgreSQL via Prisma
- locks/             → asyncio and Redis implementations of LockManager
- cache/             → Redis client factory
"""
