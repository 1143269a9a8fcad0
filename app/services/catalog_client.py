# app/services/catalog_client.py
import requests
from requests import RequestException
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from app.utils.settings import CATALOG_SERVICE_URL, CATALOG_TIMEOUT_SECONDS
from app.utils.logging import get_logger

logger = get_logger(__name__)


#tenacity retry, tylko bledy sieci / 5xx, 404 wraca jako None bez ponawiania
def catalog_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.3, min=0.3, max=3),
        retry=retry_if_exception_type(RequestException),
    )


class CatalogClient:
    """
    Klient HTTP do serwisu katalogu (kursy i pakiety).
    Brak pozycji -> None, kazdy inny blad leci dalej po wyczerpaniu prob.
    """

    def __init__(self, base_url: str | None = None, timeout: float = CATALOG_TIMEOUT_SECONDS):
        self.base_url = (base_url or CATALOG_SERVICE_URL).rstrip("/")
        self.timeout = timeout

    def fetch_course(self, course_id) -> dict | None:
        return self._get(f"/courses/{course_id}")

    def fetch_bundle(self, bundle_id) -> dict | None:
        return self._get(f"/bundles/{bundle_id}")

    @catalog_retry()
    def _get(self, path: str) -> dict | None:
        url = f"{self.base_url}{path}"
        logger.info(f"CatalogClient GET {url}")

        resp = requests.get(url, timeout=self.timeout)
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return resp.json()
