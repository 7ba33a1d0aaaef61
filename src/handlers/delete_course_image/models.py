"""Pydantic models for delete course image request/response."""

from pydantic import BaseModel, ConfigDict, Field


class DeleteCourseImageRequest(BaseModel):
    """Validation model for delete course image request."""

    model_config = ConfigDict(str_strip_whitespace=True)

    course_id: str = Field(..., min_length=1, description="Course ID")
    storage_path: str = Field(..., min_length=1, description="Storage key of the image")


class DeleteCourseImageResponse(BaseModel):
    """Response model for successful image deletion."""

    course_id: str = Field(..., description="Course ID")
    storage_path: str = Field(..., description="Storage key that was deleted")
    deleted_at: str = Field(..., description="Deletion timestamp")
