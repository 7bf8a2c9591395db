"""External service clients."""

from .fal_client import FalImageClient, extract_image_url
from .gateway_client import ChatGatewayClient
from .hosted_client import HostedServiceClient

__all__ = ["HostedServiceClient", "ChatGatewayClient", "FalImageClient", "extract_image_url"]
