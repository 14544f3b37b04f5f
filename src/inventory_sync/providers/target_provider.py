"""
Target catalog provider.

Reads the storefront catalog page by page and performs the single-product
read and whole-document replace used by the product updater.
"""

from typing import Any, Dict, List, Optional, Union

import requests

from ..audit.logger import SyncLogger
from ..config.models import FetchResult, TargetCatalogConfig
from ..exceptions import CatalogError, DataShapeError
from ..models import TargetProduct
from .base_provider import BaseProvider


class TargetCatalogProvider(BaseProvider):
    """Provider for the storefront catalog that receives corrections."""

    def __init__(
        self,
        config: TargetCatalogConfig,
        api_key: str,
        logger: SyncLogger,
        session: Optional[requests.Session] = None,
        timeout_seconds: float = 30,
    ):
        """
        Initialize the target catalog provider.

        Args:
            config: Target catalog configuration
            api_key: Resolved API key sent on every request
            logger: Logger instance
            session: HTTP session
            timeout_seconds: Timeout applied to every request
        """
        super().__init__(logger, session, timeout_seconds)
        self.config = config
        self.api_key = api_key

    def get_catalog_name(self) -> str:
        return "target"

    def _headers(self, **extra: str) -> Dict[str, str]:
        headers = {"Api-Key": self.api_key, "Accept": "application/json"}
        headers.update(extra)
        return headers

    def _product_url(self, product_id: Union[int, str]) -> str:
        return f"{self.config.base_url}/products/{product_id}"

    def fetch_products(self) -> FetchResult:
        """
        Fetch every target product by walking pages until an empty one.

        A failure on any page discards the pages already received, since a
        partial catalog would be diffed as if products were missing.
        """
        url = f"{self.config.base_url}/products"
        items: List[Any] = []
        page = 1

        self.logger.info("Fetching all target products with pagination")

        try:
            while True:
                if self.config.max_pages and page > self.config.max_pages:
                    raise DataShapeError(
                        f"Pagination exceeded max_pages={self.config.max_pages}"
                    )

                self.logger.debug(f"Fetching target page {page}")
                payload = self._request_json(
                    "GET",
                    url,
                    headers=self._headers(),
                    params={
                        "page": page,
                        "limit": self.config.page_size,
                        "join": self.config.join,
                    },
                )

                page_items = payload.get("data") if isinstance(payload, dict) else None
                if not isinstance(page_items, list) or not page_items:
                    self.logger.debug(f"No more target products after page {page - 1}")
                    break

                items.extend(page_items)
                page += 1

        except CatalogError as e:
            return self._create_failed_result(e, pages_fetched=page - 1)

        products = self._parse_products(items, TargetProduct)
        self.logger.info(
            f"Fetched {len(products)} products from target catalog in {page - 1} pages"
        )

        return FetchResult(
            catalog=self.get_catalog_name(),
            status="success",
            products=products,
            pages_fetched=page - 1,
        )

    def get_product(self, product_id: Union[int, str]) -> Dict[str, Any]:
        """
        Read the full product document.

        Raises:
            TransportError: On request failure
            DataShapeError: When the body is not a JSON object
        """
        document = self._request_json(
            "GET", self._product_url(product_id), headers=self._headers()
        )
        if not isinstance(document, dict):
            raise DataShapeError(
                f"Product {product_id}: expected a JSON object, "
                f"got {type(document).__name__}"
            )
        return document

    def replace_product(self, product_id: Union[int, str], document: Dict[str, Any]) -> None:
        """
        Write the full product document back.

        Raises:
            TransportError: On request failure
        """
        self._request_json(
            "PATCH",
            self._product_url(product_id),
            headers=self._headers(**{"Content-Type": "application/json"}),
            json_body=document,
            expect_body=False,
        )
