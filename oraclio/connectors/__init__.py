"""External CRM connectors."""

from .bitrix import BitrixClient, CRMError, build_method_url

__all__ = ["BitrixClient", "CRMError", "build_method_url"]
