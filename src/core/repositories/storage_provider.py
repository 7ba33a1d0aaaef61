"""Abstract contract for course image storage backends."""

from abc import ABC, abstractmethod
from collections.abc import Mapping

from core.models.upload import FileMetadata, UploadedFile, UploadResult
from core.utils.constants import DEFAULT_IMAGE_CONTENT_TYPE


class StorageProvider(ABC):
    """Contract for persisting an image together with its thumbnail.

    Implementations exist for Firebase Storage and Supabase Storage.
    Handlers depend on this interface, not the implementation.

    Providers are long-lived and hold no per-upload state; the only shared
    resource is the backend client owned by the implementation.
    """

    #: Human readable backend name, used in wrapped error messages.
    name: str

    @abstractmethod
    def upload_file(
        self,
        *,
        file: UploadedFile,
        storage_path: str,
        thumbnail_path: str,
        primary_buffer: bytes,
        thumbnail_buffer: bytes,
        metadata: FileMetadata | Mapping[str, str],
        content_type: str = DEFAULT_IMAGE_CONTENT_TYPE,
    ) -> UploadResult:
        """Upload the primary image, then its thumbnail, and make both public.

        The two writes are sequential and not transactional. When the
        thumbnail write fails the primary object is left in place.

        Args:
            file: Handle of the original upload (only ``name`` is used)
            storage_path: Object key of the primary image
            thumbnail_path: Object key of the thumbnail
            primary_buffer: Encoded primary image bytes
            thumbnail_buffer: Encoded thumbnail bytes
            metadata: Traceability metadata attached to both objects
            content_type: MIME type chosen by the caller

        Returns:
            UploadResult with public URLs for both objects

        Raises:
            ValidationError: If the input is structurally invalid
            StorageProviderError: If either write fails
        """

    @abstractmethod
    def delete_file(self, *, storage_path: str) -> None:
        """Delete an image and its conventionally named thumbnail.

        Missing objects are ignored.

        Args:
            storage_path: Object key of the primary image

        Raises:
            StorageProviderError: If deletion fails for any other reason
        """

    @abstractmethod
    def get_public_url(self, *, storage_path: str) -> str:
        """Return the deterministic public URL of an object. Never raises."""

    @abstractmethod
    def is_configured(self) -> bool:
        """Return True when every required credential field is non-empty."""
