"""SQLAlchemy ORM models.

Importing this module should register all tables on Base.metadata.
"""

from __future__ import annotations

from mall_api.models.member import Member

__all__ = ["Member"]
