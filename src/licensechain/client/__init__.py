"""LicenseChain API client."""

from licensechain.client.client import LicenseChainClient
from licensechain.client.http import ApiClient
from licensechain.client.licenses import LicenseService
from licensechain.client.products import ProductService
from licensechain.client.users import UserService
from licensechain.client.webhooks import WebhookService

__all__ = [
    "ApiClient",
    "LicenseChainClient",
    "LicenseService",
    "ProductService",
    "UserService",
    "WebhookService",
]
