"""Builds the configured StorageProvider from environment variables."""

import os

from aws_lambda_powertools import Logger
from pydantic import BaseModel, Field

from core.infrastructure.firebase.firebase_storage import FirebaseStorageProvider
from core.infrastructure.supabase.supabase_storage import SupabaseStorageProvider
from core.models.errors import ConfigurationError, CourseStorageError
from core.repositories.storage_provider import StorageProvider
from core.utils.constants import (
    ENV_FIREBASE_PROJECT_ID,
    ENV_FIREBASE_STORAGE_BUCKET,
    ENV_NEXT_PUBLIC_FIREBASE_PROJECT_ID,
    ENV_STORAGE_PROVIDER,
    ENV_SUPABASE_SERVICE_ROLE_KEY,
    ENV_SUPABASE_STORAGE_BUCKET,
    ENV_SUPABASE_URL,
    PROVIDER_FIREBASE,
    PROVIDER_SUPABASE,
    SUPABASE_DEFAULT_BUCKET,
    SUPPORTED_PROVIDERS,
)

logger = Logger(UTC=True)


class ConfigurationStatus(BaseModel):
    """Outcome of a storage configuration check."""

    is_valid: bool = Field(..., description="Whether storage can be used")
    error: str | None = Field(None, description="Reason storage is unusable")


class StorageFactory:
    """Creates and caches the storage provider for this process.

    Environment:
    - STORAGE_PROVIDER: "firebase" or "supabase" (required)
    - FIREBASE_PROJECT_ID / NEXT_PUBLIC_FIREBASE_PROJECT_ID, FIREBASE_STORAGE_BUCKET
    - SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY, SUPABASE_STORAGE_BUCKET
    """

    _instance: StorageProvider | None = None

    @classmethod
    def get_storage_provider(cls) -> StorageProvider:
        """Return the process-wide provider, creating it on first use."""
        if cls._instance is None:
            cls._instance = cls.create_storage_provider()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached provider."""
        cls._instance = None

    @staticmethod
    def create_storage_provider() -> StorageProvider:
        """Create a new provider from the current environment.

        Raises:
            ConfigurationError: If the provider is unknown or misconfigured
        """
        provider = os.getenv(ENV_STORAGE_PROVIDER)
        if not provider:
            raise ConfigurationError(
                message=f"{ENV_STORAGE_PROVIDER} environment variable is required",
            )

        if provider == PROVIDER_FIREBASE:
            project_id = os.getenv(ENV_FIREBASE_PROJECT_ID) or os.getenv(
                ENV_NEXT_PUBLIC_FIREBASE_PROJECT_ID
            )
            if not project_id:
                raise ConfigurationError(
                    message="Firebase project ID is required when using Firebase storage",
                    details={"provider": provider},
                )

            logger.info("Using Firebase storage provider", extra={"project_id": project_id})
            return FirebaseStorageProvider(
                project_id,
                os.getenv(ENV_FIREBASE_STORAGE_BUCKET) or None,
            )

        if provider == PROVIDER_SUPABASE:
            url = os.getenv(ENV_SUPABASE_URL)
            service_key = os.getenv(ENV_SUPABASE_SERVICE_ROLE_KEY)
            bucket = os.getenv(ENV_SUPABASE_STORAGE_BUCKET) or SUPABASE_DEFAULT_BUCKET
            if not url or not service_key or not bucket:
                raise ConfigurationError(
                    message=(
                        "Supabase URL, service key, and bucket are required "
                        "when using Supabase storage"
                    ),
                    details={"provider": provider},
                )

            logger.info("Using Supabase storage provider", extra={"bucket": bucket})
            return SupabaseStorageProvider(url, service_key, bucket)

        raise ConfigurationError(
            message=f"Unsupported storage provider: {provider}",
            details={"provider": provider, "supported": sorted(SUPPORTED_PROVIDERS)},
        )

    @classmethod
    def validate_configuration(cls) -> ConfigurationStatus:
        """Check that a usable provider can be obtained. Never raises."""
        try:
            provider = cls.get_storage_provider()
        except CourseStorageError as exc:
            logger.warning("Storage configuration invalid", extra={"error": exc.message})
            return ConfigurationStatus(is_valid=False, error=exc.message)

        if not provider.is_configured():
            return ConfigurationStatus(
                is_valid=False,
                error="Storage provider is not properly configured",
            )

        return ConfigurationStatus(is_valid=True)
