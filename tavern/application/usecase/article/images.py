"""Forum image use cases."""

import secrets
import time
from pathlib import PurePath

from pydantic import BaseModel

from tavern.application.usecase.base import require_principal
from tavern.domain.error import NotFoundError, ValidationError
from tavern.domain.model import Principal
from tavern.domain.service import FileStorage, sanitize_filename
from tavern.domain.value import StorageBucket

IMAGES_URL_PREFIX = "/api/forum/images"


class UploadImageRequest(BaseModel):
    """Upload image request."""

    filename: str | None
    content: bytes
    principal: Principal | None = None


class UploadImageResponse(BaseModel):
    """Upload image response."""

    success: bool = True
    url: str
    filename: str


class UploadImageUseCase:
    """Use case for storing an image embedded in an article."""

    def __init__(self, file_storage: FileStorage) -> None:
        """Initialize upload image use case.

        Args:
            file_storage: Storage for uploaded binaries
        """
        self.file_storage = file_storage

    async def execute(self, request: UploadImageRequest) -> UploadImageResponse:
        """Store the image under a fresh, collision-resistant name.

        Raises:
            NotAuthenticatedError: If the request is anonymous
            ValidationError: If no image was uploaded
        """
        require_principal(request.principal, "upload images")
        if not request.content:
            raise ValidationError("No image file uploaded")

        extension = PurePath(request.filename or "").suffix
        file_name = sanitize_filename(
            f"{int(time.time() * 1000)}_{secrets.token_hex(5)}{extension}"
        )
        await self.file_storage.save(
            StorageBucket.FORUM_IMAGES, file_name, request.content
        )

        return UploadImageResponse(
            url=f"{IMAGES_URL_PREFIX}/{file_name}", filename=file_name
        )


class GetImageUseCase:
    """Use case for serving a stored forum image."""

    def __init__(self, file_storage: FileStorage) -> None:
        """Initialize get image use case.

        Args:
            file_storage: Storage for uploaded binaries
        """
        self.file_storage = file_storage

    async def execute(self, filename: str) -> tuple[str, bytes]:
        """Load an image.

        Args:
            filename: Requested file name (sanitized here)

        Returns:
            Tuple of (sanitized file name, content)

        Raises:
            NotFoundError: If no such image exists
        """
        name = sanitize_filename(filename)
        content = await self.file_storage.load(StorageBucket.FORUM_IMAGES, name)
        if content is None:
            raise NotFoundError("Image", name)
        return name, content
