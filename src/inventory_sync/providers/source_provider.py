"""
Source catalog provider.

Fetches the complete ERP catalog with a single request.
"""

from typing import Optional

import requests

from ..audit.logger import SyncLogger
from ..config.models import FetchResult, SourceCatalogConfig
from ..exceptions import CatalogError, DataShapeError
from ..models import SourceProduct
from .base_provider import BaseProvider


class SourceCatalogProvider(BaseProvider):
    """Provider for the authoritative source catalog."""

    def __init__(
        self,
        config: SourceCatalogConfig,
        logger: SyncLogger,
        session: Optional[requests.Session] = None,
        timeout_seconds: float = 30,
    ):
        super().__init__(logger, session, timeout_seconds)
        self.config = config

    def get_catalog_name(self) -> str:
        return "source"

    def fetch_products(self) -> FetchResult:
        """
        Fetch all source products.

        A payload without a "data" field is an empty catalog. Transport
        and payload errors are logged and reported as a failed result.
        """
        try:
            payload = self._request_json("GET", self.config.url)

            if not isinstance(payload, dict):
                raise DataShapeError(
                    f"Expected a JSON object, got {type(payload).__name__}"
                )

            items = payload.get("data")
            if items is None:
                items = []
            if not isinstance(items, list):
                raise DataShapeError(
                    f"Expected 'data' to be a list, got {type(items).__name__}"
                )

        except CatalogError as e:
            return self._create_failed_result(e)

        products = self._parse_products(items, SourceProduct)
        self.logger.info(f"Fetched {len(products)} products from source catalog")

        return FetchResult(
            catalog=self.get_catalog_name(),
            status="success",
            products=products,
            pages_fetched=1,
        )
