from __future__ import annotations

import logging
from threading import Lock
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from salesboard.core.config import get_settings
from salesboard.core.errors import ConfigurationError, UpstreamError
from salesboard.models.orders import OrderDetails, OrderListItem

logger = logging.getLogger(__name__)

# Puppeteer functions executed remotely by Browserless. Credentials and the
# order id travel in ``context`` rather than being spliced into the source.
_LOGIN_SNIPPET = """
  await page.goto(context.baseUrl + '/admin/', { waitUntil: 'networkidle0' });
  await page.type('input[name="Site"]', context.site);
  await page.type('input[name="Login"]', context.username);
  await page.type('input[name="Password"]', context.password);
  await page.click('input[type="image"]');
  await page.waitForNavigation({ waitUntil: 'networkidle0' });
  await page.goto(context.baseUrl + '/admin/listorder.asp', { waitUntil: 'networkidle0' });
"""

LOOKUP_ORDER_FUNCTION = (
    "export default async function ({ page, context }) {\n"
    "  try {\n"
    + _LOGIN_SNIPPET
    + """
    const row = await page.evaluate((targetOrderId) => {
      for (const tr of document.querySelectorAll('table tr')) {
        const cells = tr.querySelectorAll('td');
        if (cells.length < 8) continue;
        const link = cells[1].querySelector('a');
        if (!link || link.textContent.trim() !== targetOrderId) continue;
        return {
          customer: cells[2].textContent.trim(),
          db: cells[7].textContent.trim(),
          href: link.href,
        };
      }
      return null;
    }, context.orderId);
    if (!row) {
      return { data: { found: false }, type: 'application/json' };
    }
    await page.goto(row.href, { waitUntil: 'networkidle0' });
    const salesrep = await page.evaluate(() => {
      const match = document.body.innerText.match(/Placed by:\\s*([^\\n]+)/);
      return match ? match[1].trim() : '';
    });
    return {
      data: { found: true, order: { orderId: context.orderId, customer: row.customer, db: row.db, salesrep } },
      type: 'application/json',
    };
  } catch (error) {
    return { data: { found: false, error: error.message }, type: 'application/json' };
  }
}
"""
)

RECENT_ORDERS_FUNCTION = (
    "export default async function ({ page, context }) {\n"
    "  try {\n"
    + _LOGIN_SNIPPET
    + """
    const orders = await page.evaluate(() => {
      const result = [];
      document.querySelectorAll('table tr').forEach((tr, index) => {
        if (index === 0) return;
        const cells = tr.querySelectorAll('td');
        if (cells.length < 8) return;
        const link = cells[1].querySelector('a');
        if (!link) return;
        const orderId = link.textContent.trim();
        if (!orderId || isNaN(parseInt(orderId))) return;
        result.push({
          orderId,
          customer: cells[2].textContent.trim(),
          db: cells[7].textContent.trim(),
          date: cells[0].textContent.trim(),
        });
      });
      return result;
    });
    return { data: { success: true, orders }, type: 'application/json' };
  } catch (error) {
    return { data: { success: false, error: error.message, orders: [] }, type: 'application/json' };
  }
}
"""
)


class OrderPortalClient:
    _shared_client: httpx.Client | None = None
    _client_lock: Lock = Lock()

    def __init__(self) -> None:
        settings = get_settings()
        if not settings.browserless_api_key or not settings.webmerc_username or not settings.webmerc_password:
            raise ConfigurationError("Missing Webmerc/Browserless credentials")
        self.settings = settings
        self.function_url = settings.browserless_url.rstrip("/") + "/function"
        self._client = self._get_shared_client(settings.order_lookup_timeout_seconds)

    @classmethod
    def _get_shared_client(cls, timeout: float) -> httpx.Client:
        if cls._shared_client is not None:
            return cls._shared_client
        with cls._client_lock:
            if cls._shared_client is None:
                cls._shared_client = httpx.Client(timeout=timeout)
        return cls._shared_client

    def lookup_order(self, order_id: str) -> Optional[OrderDetails]:
        data = self._run(LOOKUP_ORDER_FUNCTION, {"orderId": order_id})
        if data.get("error"):
            raise UpstreamError("Order portal lookup failed", details={"reason": data["error"]})
        order = data.get("order")
        if not data.get("found") or not isinstance(order, dict):
            return None
        try:
            return OrderDetails.model_validate(order)
        except ValidationError as exc:
            raise UpstreamError("Order portal returned an unreadable order") from exc

    def fetch_recent_orders(self) -> List[OrderListItem]:
        data = self._run(RECENT_ORDERS_FUNCTION, {})
        if not data.get("success"):
            raise UpstreamError("Order portal listing failed", details={"reason": data.get("error")})
        try:
            return [OrderListItem.model_validate(row) for row in data.get("orders") or []]
        except ValidationError as exc:
            raise UpstreamError("Order portal returned an unreadable order list") from exc

    def _run(self, code: str, context: Dict[str, Any]) -> Dict[str, Any]:
        payload = {
            "code": code,
            "context": {
                "baseUrl": self.settings.webmerc_base_url.rstrip("/"),
                "site": self.settings.webmerc_company,
                "username": self.settings.webmerc_username,
                "password": self.settings.webmerc_password,
                **context,
            },
        }
        try:
            response = self._client.post(
                self.function_url,
                params={"token": self.settings.browserless_api_key},
                json=payload,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error("Browserless returned status=%s", exc.response.status_code)
            raise UpstreamError(
                f"Browserless API error: {exc.response.status_code}",
                details={"body": exc.response.text[:500]},
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("Browserless request failed: %s", exc)
            raise UpstreamError("Browserless request failed") from exc
        try:
            body = response.json()
        except ValueError as exc:
            logger.error("Browserless returned a non-JSON body")
            raise UpstreamError(
                "Browserless returned an unreadable response",
                details={"body": response.text[:500]},
            ) from exc
        data = body.get("data") if isinstance(body, dict) else None
        return data if isinstance(data, dict) else {}
