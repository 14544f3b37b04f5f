"""
Base provider class for catalog access.

This module provides the HTTP plumbing shared by the source and target
catalog providers: request execution, error classification and parsing
of product records.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type

import requests
from pydantic import BaseModel, ValidationError

from ..audit.logger import SyncLogger
from ..config.models import FetchResult
from ..exceptions import CatalogError, DataShapeError, TransportError

# Maximum number of characters of a response body kept in error messages
MAX_ERROR_BODY_LENGTH = 500


class BaseProvider(ABC):
    """Base provider class with shared functionality for catalog access."""

    def __init__(
        self,
        logger: SyncLogger,
        session: Optional[requests.Session] = None,
        timeout_seconds: float = 30,
    ):
        """
        Initialize the base provider.

        Args:
            logger: Logger instance
            session: HTTP session; a new requests.Session is created when omitted
            timeout_seconds: Timeout applied to every request
        """
        self.logger = logger
        self.session = session or requests.Session()
        self.timeout_seconds = timeout_seconds

    @abstractmethod
    def get_catalog_name(self) -> str:
        """
        Get the name of the catalog for logging purposes.

        Returns:
            String name of the catalog (e.g., "source", "target")
        """

    @abstractmethod
    def fetch_products(self) -> FetchResult:
        """
        Fetch the full product catalog.
        Must be implemented by subclasses and must not raise.

        Returns:
            FetchResult with the parsed products or the failure reason
        """

    def _request_json(
        self,
        method: str,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
        json_body: Any = None,
        expect_body: bool = True,
    ) -> Any:
        """
        Execute an HTTP request and decode the JSON response.

        Args:
            method: HTTP method
            url: Absolute URL
            headers: Request headers
            params: Query string parameters
            json_body: Body sent as JSON
            expect_body: Whether a JSON response body is required

        Returns:
            Decoded JSON body, or None when no body is expected

        Raises:
            TransportError: On network failures and non-2xx responses
            DataShapeError: When the response body is not valid JSON
        """
        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                params=params,
                json=json_body,
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        if not 200 <= response.status_code < 300:
            detail = (response.text or "")[:MAX_ERROR_BODY_LENGTH]
            raise TransportError(
                f"{method} {url} returned HTTP {response.status_code}: {detail}",
                status_code=response.status_code,
                detail=detail,
            )

        if not expect_body:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise DataShapeError(f"{method} {url} returned invalid JSON: {e}") from e

    def _parse_products(self, items: List[Any], model: Type[BaseModel]) -> List[BaseModel]:
        """
        Parse raw product records, skipping the ones that fail validation.

        Args:
            items: Raw product records
            model: Pydantic model to validate each record with

        Returns:
            List of parsed product models
        """
        products = []
        for index, item in enumerate(items):
            try:
                products.append(model.model_validate(item))
            except ValidationError as e:
                self.logger.warning(
                    f"Skipping malformed {self.get_catalog_name()} product at position "
                    f"{index}: {e.error_count()} validation error(s)",
                    extra={"catalog": self.get_catalog_name()},
                )
        return products

    def _create_failed_result(self, error: CatalogError, pages_fetched: int = 0) -> FetchResult:
        """
        Log a catalog failure and create a failed FetchResult.

        Args:
            error: The transport or data shape error
            pages_fetched: Number of pages received before the failure

        Returns:
            FetchResult with failed status and no products
        """
        error_msg = (
            f"Failed to fetch {self.get_catalog_name()} catalog "
            f"({type(error).__name__}): {error}"
        )
        self.logger.error(error_msg, extra={"catalog": self.get_catalog_name()})
        return FetchResult(
            catalog=self.get_catalog_name(),
            status="failed",
            pages_fetched=pages_fetched,
            error_message=error_msg,
        )
