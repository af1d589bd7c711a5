"""
Billing provider client.

Creates and deletes customer identities with the external billing system.
A created customer exists remotely no matter what the caller does next, so
callers that fail afterwards are responsible for reporting the orphan.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Optional

import requests

from accounthub.core.config import Settings
from accounthub.core.errors import BillingProviderError

logger = logging.getLogger(__name__)


class BillingProvider(ABC):
    """Interface every billing provider client must implement."""

    @abstractmethod
    def create_customer(self, *, email: str, reference_id: int, first_name: str, last_name: str) -> str:
        """Open a customer account and return the provider-assigned id.

        Raises:
            BillingProviderError: If the customer could not be created.
        """
        ...

    @abstractmethod
    def delete_customer(self, customer_id: str) -> None:
        """Delete a customer; deleting an already-deleted customer succeeds.

        Raises:
            BillingProviderError: If the provider rejected the request.
        """
        ...


class StripeBillingClient(BillingProvider):
    """Billing provider backed by the Stripe REST API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.stripe.com",
        timeout: float = 5.0,
        max_retries: int = 1,
        http: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.http = http or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings) -> "StripeBillingClient":
        return cls(
            api_key=settings.BILLING_API_KEY,
            base_url=settings.BILLING_API_BASE,
            timeout=settings.BILLING_TIMEOUT_SECONDS,
            max_retries=settings.BILLING_MAX_RETRIES,
        )

    def create_customer(self, *, email: str, reference_id: int, first_name: str, last_name: str) -> str:
        data = {
            "email": email,
            "name": f"{first_name} {last_name}",
            "metadata[user_id]": str(reference_id),
        }
        # Same key on every retry so a timed-out create is not duplicated
        headers = {"Idempotency-Key": f"user-{reference_id}-{uuid.uuid4()}"}
        response = self._request("POST", "/v1/customers", data=data, headers=headers)

        try:
            payload = response.json()
        except ValueError as exc:
            raise BillingProviderError("billing provider returned a non-JSON body") from exc

        customer_id = payload.get("id") if isinstance(payload, dict) else None
        if not isinstance(customer_id, str) or not customer_id:
            raise BillingProviderError("billing provider response has no customer id")

        logger.info("Created billing customer %s for user %s", customer_id, reference_id)
        return customer_id

    def delete_customer(self, customer_id: str) -> None:
        response = self._request("DELETE", f"/v1/customers/{customer_id}", allow_not_found=True)
        if response.status_code == 404:
            logger.info("Billing customer %s was already gone", customer_id)
        else:
            logger.info("Deleted billing customer %s", customer_id)

    def _request(
        self,
        method: str,
        path: str,
        data: Optional[dict] = None,
        headers: Optional[dict] = None,
        allow_not_found: bool = False,
    ) -> requests.Response:
        """
        Send one API request, retrying timeouts and connection errors.

        Only safe to retry because creates carry an idempotency key and
        deletes are idempotent.

        Raises:
            BillingProviderError: On any failure after retries are exhausted
        """
        if not self.api_key:
            raise BillingProviderError("billing API key is not configured")

        url = f"{self.base_url}{path}"
        attempts = self.max_retries + 1
        last_error: Optional[Exception] = None

        for attempt in range(1, attempts + 1):
            try:
                response = self.http.request(
                    method,
                    url,
                    auth=(self.api_key, ""),
                    data=data,
                    headers=headers,
                    timeout=self.timeout,
                )
            except (requests.Timeout, requests.ConnectionError) as exc:
                last_error = exc
                logger.warning("Billing request %s %s failed (attempt %d/%d): %s",
                               method, path, attempt, attempts, exc)
                continue
            except requests.RequestException as exc:
                raise BillingProviderError(f"{method} {path} failed: {exc}") from exc

            if response.status_code == 404 and allow_not_found:
                return response
            if response.status_code >= 400:
                logger.error("Billing provider answered %s %s with %d: %s",
                             method, path, response.status_code, response.text[:500])
                raise BillingProviderError(f"{method} {path} returned {response.status_code}")
            return response

        # A timed-out request may still have been applied remotely
        logger.error("Billing request %s %s gave up after %d attempts; remote outcome unknown (%s)",
                     method, path, attempts, (headers or {}).get("Idempotency-Key", "no idempotency key"))
        raise BillingProviderError(f"{method} {path} failed after {attempts} attempts") from last_error
