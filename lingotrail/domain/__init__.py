"""
Domain layer.

Learning rules with no dependency on FastAPI, SQLAlchemy or any other
infrastructure:
- Entities: progress events, journey assignments, invitations, users
- Value Objects: ids, topic links, progress snapshots
- Domain Services: the topic completion policy
"""
