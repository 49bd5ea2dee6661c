from typing import Any


class IKeyValueStore:
    def get(self, key: str) -> Any | None: ...
    def set(self, key: str, value: Any) -> None: ...
    def delete(self, key: str) -> None: ...
    def get_by_prefix(self, prefix: str) -> list[Any]: ...


class IRecordBackend:
    """Storage contract shared by the local and the remote variants.

    Collections are ``students``, ``adaptations``, ``reports`` and ``users``.
    ``student_id`` scopes the two student-owned collections.
    """

    def list(self, collection: str, student_id: str | None = None) -> list[dict]: ...
    def get(self, collection: str, record_id: str, student_id: str | None = None) -> dict | None: ...
    def save(self, collection: str, record: dict) -> None: ...
    def delete(self, collection: str, record_id: str, student_id: str | None = None) -> bool: ...


class ICredentialVerifier:
    def verify(self, email: str, password: str) -> bool: ...

