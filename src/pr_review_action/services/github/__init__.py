from .base_host import VersionControlHost
from .pr_api_client import PRApiClient

__all__ = ["VersionControlHost", "PRApiClient"]
