from __future__ import annotations

import uuid
from datetime import datetime, timezone

from app.schemas.intake import SubmissionWriteRecord
from app.schemas.responses import CallLogEntry, StoredSubmission


class SubmissionStore:
    """In-process submissions table plus call log, unique on conversation_id."""

    def __init__(self, max_events: int = 5000) -> None:
        self._submissions: dict[str, StoredSubmission] = {}
        self._events: list[CallLogEntry] = []
        self._max_events = max_events

    def upsert(self, record: SubmissionWriteRecord) -> StoredSubmission:
        now = datetime.now(timezone.utc)
        existing = self._submissions.get(record.conversation_id)
        stored = StoredSubmission(
            **record.model_dump(),
            id=existing.id if existing else uuid.uuid4().hex,
            created_at=existing.created_at if existing else now,
            updated_at=now,
        )
        self._submissions[record.conversation_id] = stored
        return stored

    def get(self, conversation_id: str) -> StoredSubmission | None:
        return self._submissions.get(conversation_id)

    def list_submissions(self) -> list[StoredSubmission]:
        # newest first (upserts keep their original position)
        return list(reversed(self._submissions.values()))

    def conversation_ids(self) -> set[str]:
        return set(self._submissions)

    def log_event(
        self, conversation_id: str, event_type: str, payload: dict | None = None
    ) -> CallLogEntry:
        entry = CallLogEntry(
            id=uuid.uuid4().hex[:12],
            conversation_id=conversation_id,
            event_type=event_type,
            payload=payload,
            created_at=datetime.now(timezone.utc),
        )
        self._events.append(entry)
        # Drop oldest entries first
        if len(self._events) > self._max_events:
            del self._events[: len(self._events) - self._max_events]
        return entry

    def events(self, conversation_id: str) -> list[CallLogEntry]:
        return [e for e in self._events if e.conversation_id == conversation_id]
