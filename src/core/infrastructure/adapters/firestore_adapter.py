"""Thin Firestore adapter wrapping firebase_admin document reads."""

from typing import Any, Protocol

from firebase_admin import firestore

from core.infrastructure.adapters.firebase_adapter import get_firebase_app


class FirestoreAdapterProtocol(Protocol):
    """Minimal Firestore adapter protocol (repository-facing)."""

    def get_document(self, *, collection: str, document_id: str) -> dict[str, Any] | None: ...


class FirestoreAdapter:
    """Low-level Firestore operations (mechanical, no error handling).

    This adapter:
    - Wraps the firebase_admin Firestore client, created on first use
    - Does NOT handle errors (lets them bubble up)
    - Repository implementations catch and translate errors
    """

    def __init__(self, *, project_id: str, bucket_name: str = "") -> None:
        self._project_id = project_id
        self._bucket_name = bucket_name
        self._client: Any = None

    @property
    def client(self) -> Any:
        if self._client is None:
            app = get_firebase_app(self._project_id, self._bucket_name)
            self._client = firestore.client(app=app)
        return self._client

    def get_document(self, *, collection: str, document_id: str) -> dict[str, Any] | None:
        """Return the document data, or None when it does not exist.
        Raises google-cloud exceptions - caught by repository implementation.
        """
        snapshot = self.client.collection(collection).document(document_id).get()
        if not snapshot.exists:
            return None
        data: dict[str, Any] = snapshot.to_dict() or {}
        return data
