"""
Persistence Layer - Document store implementations.

- memory/ → InMemoryDocumentStore and its repositories
- prisma/ → Prisma repositories (imported only when STORE_BACKEND=prisma)
"""
