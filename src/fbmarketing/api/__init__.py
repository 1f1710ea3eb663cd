"""HTTP plumbing for the Marketing Graph API."""

from .client import ApiClient
from .route import Route

__all__ = ["ApiClient", "Route"]
