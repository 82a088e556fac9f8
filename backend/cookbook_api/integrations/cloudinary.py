"""
Cloudinary Upload API HTTP Client

This module provides an async HTTP client for uploading images to
Cloudinary, the image host used for user avatars.

API Documentation: https://cloudinary.com/documentation/image_upload_api_reference

Features:
- Async HTTP requests using httpx
- Signed uploads (SHA-1 signature over the sorted parameters + API secret)
- Timeout protection (settings.UPLOAD_TIMEOUT)
- Transport and provider failures raised as ImageUploadError
"""

import hashlib
import logging
import time
from typing import Any, Dict, Optional

import httpx

from cookbook_api.core.config import settings
from cookbook_api.core.exceptions import ImageUploadError


logger = logging.getLogger("cookbook_api.cloudinary")


def sign_params(params: Dict[str, Any], api_secret: str) -> str:
    """
    Compute the Cloudinary request signature.

    Parameters are sorted by name, serialized as key=value pairs joined
    with "&", the API secret is appended and the result is SHA-1 hashed.
    Empty values are left out.

    Example:
        >>> sign_params({"timestamp": 1315060510, "public_id": "sample_image"}, "abcd")
        'b4ad47fb4e25c7bf5f92a20089f9db59bc302313'
    """
    to_sign = "&".join(
        f"{key}={value}"
        for key, value in sorted(params.items())
        if value not in (None, "")
    )
    return hashlib.sha1(f"{to_sign}{api_secret}".encode("utf-8")).hexdigest()


class CloudinaryClient:
    """
    HTTP client for the Cloudinary upload API.

    Attributes:
        cloud_name (str): Cloudinary cloud name
        api_key (str): Public API key sent with each upload
        api_secret (str): Secret used only to sign requests, never sent
        folder (str): Folder the uploaded assets are stored in
    """

    def __init__(
        self,
        cloud_name: Optional[str] = None,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        folder: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client, falling back to settings for anything not given.

        `transport` lets tests plug in an httpx.MockTransport.
        """
        self.cloud_name = cloud_name if cloud_name is not None else settings.CLOUDINARY_CLOUD_NAME
        self.api_key = api_key if api_key is not None else settings.CLOUDINARY_API_KEY
        self.api_secret = api_secret if api_secret is not None else settings.CLOUDINARY_API_SECRET
        self.folder = folder if folder is not None else settings.CLOUDINARY_FOLDER
        self.base_url = (base_url or settings.CLOUDINARY_API_URL).rstrip("/")
        self.timeout = timeout or settings.UPLOAD_TIMEOUT
        self.transport = transport

    @property
    def is_configured(self) -> bool:
        """True when every credential needed for a signed upload is set."""
        return bool(self.cloud_name and self.api_key and self.api_secret)

    @property
    def upload_url(self) -> str:
        return f"{self.base_url}/{self.cloud_name}/image/upload"

    async def upload(self, image: str) -> Dict[str, Any]:
        """
        Upload one image.

        Args:
            image: Data URI, bare base64 string or remote URL

        Returns:
            dict: Cloudinary response, including:
                - secure_url (str): HTTPS URL of the stored image
                - created_at (str): ISO timestamp of the stored asset
                - public_id (str): Asset id inside the cloud

        Raises:
            ImageUploadError: If the client is not configured, the host is
                unreachable, times out, or answers with an error status
        """
        if not self.is_configured:
            raise ImageUploadError("Image upload is not configured", status_code=503)

        if not image.startswith(("data:", "http://", "https://")):
            # Bare base64 payloads must be sent as a data URI
            image = f"data:image/png;base64,{image}"

        params = {
            "folder": self.folder,
            "timestamp": int(time.time()),
        }
        data = {
            **params,
            "file": image,
            "api_key": self.api_key,
            "signature": sign_params(params, self.api_secret),
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.upload_url, data=data)
        except httpx.TimeoutException as e:
            logger.error(f"UPLOAD_TIMEOUT | cloud={self.cloud_name} | error={e}")
            raise ImageUploadError("Timeout while uploading image") from e
        except httpx.HTTPError as e:
            logger.error(f"UPLOAD_UNREACHABLE | cloud={self.cloud_name} | error={e}")
            raise ImageUploadError("Image host unreachable") from e

        if response.status_code >= 400:
            message = _error_message(response)
            logger.warning(
                f"UPLOAD_REJECTED | cloud={self.cloud_name} | status={response.status_code} | error={message}"
            )
            raise ImageUploadError(
                f"Image host rejected the upload: {message}",
                details={"provider_status": response.status_code},
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error(
                f"UPLOAD_UNREADABLE | cloud={self.cloud_name} | status={response.status_code} "
                f"| body={response.text[:200]}"
            )
            raise ImageUploadError("Image host sent an unreadable response") from e


def _error_message(response: httpx.Response) -> str:
    """Extract Cloudinary's {"error": {"message": ...}} text, or the raw body."""
    try:
        return response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return response.text[:200]


# Global client instance
# Used by the avatar endpoint through the get_image_uploader dependency
cloudinary_client = CloudinaryClient()
