"""
Test data factories.

Uses factory pattern to generate consistent test data.
"""

from datetime import datetime
from typing import Optional
from uuid import uuid4


class CampaignFactory:
    """
    Factory for campaign rows as stored in the campaigns table.

    Usage:
        campaign = CampaignFactory.create(status="active", messages_sent=120)
        campaigns = CampaignFactory.create_batch(3, user_id="user-123")
    """

    _counter = 0

    @classmethod
    def _next_counter(cls) -> int:
        cls._counter += 1
        return cls._counter

    @classmethod
    def create(
        cls,
        id: Optional[str] = None,
        user_id: str = "user-123",
        name: Optional[str] = None,
        type: str = "whatsapp",
        status: str = "draft",
        candidates_count: Optional[int] = 0,
        messages_sent: Optional[int] = 0,
        calls_made: Optional[int] = 0,
        responses_received: Optional[int] = 0,
        created_at: Optional[str] = None,
        **extra,
    ) -> dict:
        counter = cls._next_counter()
        now = datetime.utcnow().isoformat() + "Z"

        return {
            "id": id or str(uuid4()),
            "user_id": user_id,
            "name": name or f"Admissions Campaign {counter}",
            "type": type,
            "status": status,
            "scheduled_at": None,
            "template_whatsapp": None,
            "template_voice": None,
            "candidates_count": candidates_count,
            "messages_sent": messages_sent,
            "calls_made": calls_made,
            "responses_received": responses_received,
            "created_at": created_at or now,
            "updated_at": now,
            **extra,
        }

    @classmethod
    def create_batch(cls, count: int, **overrides) -> list:
        return [cls.create(**overrides) for _ in range(count)]


class CandidateCsvFactory:
    """
    Builds candidate CSV text.

    Usage:
        text = CandidateCsvFactory.create(rows=25)
        content = CandidateCsvFactory.create_bytes(rows=3)
    """

    HEADER = "Name,Phone,Email,City,Course"

    @classmethod
    def row(cls, index: int) -> str:
        return (
            f"Student {index},98765{index:05d},student{index}@example.edu,"
            f"Pune,B.Tech"
        )

    @classmethod
    def create(cls, rows: int = 3, header: Optional[str] = None) -> str:
        lines = [header or cls.HEADER]
        lines.extend(cls.row(i) for i in range(1, rows + 1))
        return "\n".join(lines) + "\n"

    @classmethod
    def create_bytes(cls, rows: int = 3, header: Optional[str] = None) -> bytes:
        return cls.create(rows=rows, header=header).encode("utf-8")
