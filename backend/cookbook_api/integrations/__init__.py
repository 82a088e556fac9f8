"""
Integrations
Clients for remote services. The only one is Cloudinary, which hosts avatars.
"""

from cookbook_api.integrations.cloudinary import CloudinaryClient, cloudinary_client, sign_params

__all__ = ["CloudinaryClient", "cloudinary_client", "sign_params"]
