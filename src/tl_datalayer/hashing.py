"""SHA-256 hashing of customer identifiers."""

from __future__ import annotations

import hashlib
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog

from .clock import utc_timestamp

logger = structlog.stdlib.get_logger(__name__)

HASHING_ALGORITHM = "SHA256"


def hash_sha256(value: Any) -> str | None:
    """Hex SHA-256 digest of a non-empty string, else None."""
    if not value or not isinstance(value, str):
        logger.warning("invalid input for hashing", kind=type(value).__name__)
        return None
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def hash_user_id(user_id: str) -> str | None:
    return hash_sha256(user_id)


def hash_phone(phone: str) -> str | None:
    return hash_sha256(phone)


@dataclass
class HashedCustomer:
    """Customer identifiers together with their digests. Never persisted."""

    user_id: str | None = None
    email: str | None = None
    phone: str | None = None
    loyalty_tier: str | None = None
    user_id_hash: str | None = None
    phone_hash: str | None = None
    hashing_timestamp: str = field(default_factory=utc_timestamp)
    hashing_algorithm: str = HASHING_ALGORITHM

    def to_dict(self) -> dict[str, Any]:
        """Data layer representation."""
        return {
            "userId": self.user_id,
            "email": self.email,
            "phone": self.phone,
            "loyaltyTier": self.loyalty_tier,
            "userIdHash": self.user_id_hash,
            "phoneHash": self.phone_hash,
            "hashingTimestamp": self.hashing_timestamp,
            "hashingAlgorithm": self.hashing_algorithm,
        }


def create_hashed_customer(data: Mapping[str, Any] | None) -> HashedCustomer | None:
    """Build a HashedCustomer from a record with userId/email/phone/loyaltyTier."""
    if not data:
        return None
    user_id = data.get("userId")
    phone = data.get("phone")
    return HashedCustomer(
        user_id=user_id,
        email=data.get("email"),
        phone=phone,
        loyalty_tier=data.get("loyaltyTier"),
        user_id_hash=hash_user_id(user_id) if user_id else None,
        phone_hash=hash_phone(phone) if phone else None,
    )
