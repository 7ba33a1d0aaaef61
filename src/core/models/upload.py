"""Shared storage data model used by every storage provider."""

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr


class UploadedFile(BaseModel):
    """Handle describing the file a caller is uploading."""

    name: StrictStr = Field(..., description="Original display name of the file")
    content_type: StrictStr | None = Field(None, description="MIME type reported by the client")
    size: StrictInt | None = Field(None, description="Original size in bytes")


class FileMetadata(BaseModel):
    """Traceability metadata attached to stored objects.

    All four fields must be present; empty strings are accepted because
    content is validated upstream by the caller.
    """

    model_config = ConfigDict(frozen=True)

    course_id: StrictStr = Field(..., description="Course the image belongs to")
    instructor_id: StrictStr = Field(..., description="Course instructor")
    uploaded_by: StrictStr = Field(..., description="User who uploaded the image")
    uploaded_at: StrictStr = Field(..., description="ISO-8601 upload timestamp (UTC)")
    image_type: StrictStr | None = Field(None, description="Optional image role, e.g. cover")

    def to_object_metadata(self) -> dict[str, str]:
        """Render the mapping stored as backend object metadata."""
        return {
            "courseId": self.course_id,
            "instructorId": self.instructor_id,
            "uploadedBy": self.uploaded_by,
            "uploadedAt": self.uploaded_at,
        }


class UploadResult(BaseModel):
    """Result of a successful primary + thumbnail upload."""

    url: StrictStr = Field(..., description="Public URL of the primary object")
    file_name: StrictStr = Field(..., description="Original display name of the uploaded file")
    storage_path: StrictStr = Field(..., description="Storage key of the primary object")
    thumbnail_url: StrictStr | None = Field(None, description="Public URL of the thumbnail object")
