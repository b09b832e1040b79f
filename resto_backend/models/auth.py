# resto_backend/models/auth.py
# type: ignore

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, ForeignKey, TIMESTAMP, Uuid
from sqlalchemy.orm import relationship

from resto_backend.database import Base


def utcnow():
    return datetime.now(timezone.utc)


class User(Base):
    """
    A registered account. `password` holds the pbkdf2 hash, never the
    plaintext, and no response schema declares it.
    """
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)

    # Staff affiliation. users -> restaurants -> users is a cycle, so this
    # constraint is added with ALTER after both tables exist (skipped on SQLite).
    restaurant_id = Column(
        Uuid,
        ForeignKey(
            "restaurants.id",
            ondelete="SET NULL",
            use_alter=True,
            name="fk_users_restaurant_id",
        ),
        nullable=True,
    )

    created_at = Column(TIMESTAMP(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    restaurant = relationship(
        "Restaurant",
        back_populates="staff",
        foreign_keys=[restaurant_id],
        post_update=True,
    )
    # ON DELETE CASCADE on companies.manager_id / restaurants.creator_id
    managed_companies = relationship(
        "Company", back_populates="manager", cascade="all, delete-orphan"
    )
    created_restaurants = relationship(
        "Restaurant",
        back_populates="creator",
        foreign_keys="Restaurant.creator_id",
        cascade="all, delete-orphan",
    )
