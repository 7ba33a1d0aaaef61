"""Thin adapter for interacting with Supabase Storage."""

from typing import Any, Protocol

from supabase import Client, create_client


class _SupabaseBucket(Protocol):
    """Internal typing for a storage3 bucket proxy (Supabase-facing only)."""

    def upload(
        self,
        path: str,
        file: bytes,
        file_options: dict[str, Any] | None = None,
    ) -> Any: ...

    def remove(self, paths: list[str]) -> list[dict[str, Any]]: ...


class SupabaseStorageAdapterProtocol(Protocol):
    """Minimal Supabase Storage adapter protocol (provider-facing)."""

    def upload_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        metadata: dict[str, str],
    ) -> None: ...

    def remove_object(self, *, key: str) -> None: ...


class SupabaseStorageAdapter:
    """Low-level Supabase Storage operations (mechanical, no error handling).

    This adapter:
    - Wraps the supabase client storage API for one bucket
    - Creates the client on first use, so construction never does I/O
    - Does NOT handle errors (lets them bubble up)
    - Provider implementations catch and translate errors
    """

    def __init__(self, *, url: str, service_key: str, bucket_name: str) -> None:
        self._url = url
        self._service_key = service_key
        self._bucket_name = bucket_name
        self._client: Client | None = None

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = create_client(self._url, self._service_key)
        return self._client

    def _bucket(self) -> _SupabaseBucket:
        return self.client.storage.from_(self._bucket_name)

    def upload_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        metadata: dict[str, str],
    ) -> None:
        """Upload (or overwrite) an object.
        Raises storage3 exceptions - caught by provider implementation.
        """
        self._bucket().upload(
            key,
            body,
            file_options={
                "content-type": content_type,
                "upsert": "true",
                "metadata": metadata,
            },
        )

    def remove_object(self, *, key: str) -> None:
        """Remove an object.
        Raises storage3 exceptions - caught by provider implementation.
        """
        self._bucket().remove([key])

    def __repr__(self) -> str:
        return f"{type(self).__name__}(url={self._url!r}, bucket={self._bucket_name!r})"
