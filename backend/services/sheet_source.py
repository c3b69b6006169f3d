"""Spreadsheet export fetcher.

Downloads the raw xlsx export for a sheet id. No parsing, no caching,
no retries. A failed fetch surfaces as FetchError.
"""

import logging

import httpx

from errors import FetchError

logger = logging.getLogger(__name__)

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class SheetFetcher:
    def __init__(
        self,
        url_template: str,
        timeout: float = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url_template = url_template
        self.timeout = timeout
        self._transport = transport

    def export_url(self, sheet_id: str) -> str:
        return self.url_template.format(sheet_id=sheet_id)

    async def fetch(self, sheet_id: str) -> bytes:
        """Return the full export body for ``sheet_id``."""
        url = self.export_url(sheet_id)
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                resp = await client.get(url, headers={"Accept": XLSX_MIME})
                resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("Sheet export %s returned HTTP %d", sheet_id, status)
            raise FetchError(
                f"Failed to fetch sheet {sheet_id}: upstream returned HTTP {status}",
                upstream_status=status,
            ) from e
        except httpx.TimeoutException as e:
            logger.warning("Sheet export %s timed out after %ss", sheet_id, self.timeout)
            raise FetchError(f"Failed to fetch sheet {sheet_id}: request timed out") from e
        except httpx.HTTPError as e:
            logger.warning("Sheet export %s failed: %s", sheet_id, e)
            raise FetchError(f"Failed to fetch sheet {sheet_id}: {e}") from e

        logger.info("Fetched sheet %s (%d bytes)", sheet_id, len(resp.content))
        return resp.content
