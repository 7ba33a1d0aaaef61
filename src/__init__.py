"""Course Image Storage Service Package."""

__version__ = "1.0.0"
__description__ = (
    "Serverless course image storage on AWS Lambda with Firebase or Supabase backends"
)

__all__ = ["handlers", "core"]
