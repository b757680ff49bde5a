"""
Dashboard API client
Fetches boundaries and metric tables over HTTP and validates every row
against the per-metric record schemas before anything is rendered.
"""

import logging
from typing import Any, Dict, List, Optional, Type

import requests
from pydantic import BaseModel
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import settings
from .models import AdminRecord, BoundaryFeature, MapLevel
from .data.datasets import get_dataset

logger = logging.getLogger(__name__)

DEFAULT_RETRY = Retry(
    total=3,
    backoff_factor=1,
    status_forcelist=[429, 502, 503, 504],
    allowed_methods=["GET", "HEAD", "OPTIONS"],
    raise_on_status=False,
)

class DashboardAPIError(Exception):
    """Non-2xx response or a `success: false` envelope"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

def create_session(retry: Optional[Retry] = None) -> requests.Session:
    session = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or DEFAULT_RETRY)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers["User-Agent"] = f"agri-dashboard-client/{settings.VERSION}"
    return session

class DashboardClient:
    """Thin client for the dashboard HTTP API"""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[int] = None,
                 session: Optional[requests.Session] = None):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.API_TIMEOUT
        self.session = session or create_session()

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{settings.API_V1_STR}{path}"
        response = self.session.get(url, params=params, timeout=self.timeout)

        if response.status_code != 200:
            try:
                detail = response.json().get("detail", response.text)
            except ValueError:
                detail = response.text
            raise DashboardAPIError(f"GET {path} failed: {detail}", response.status_code)

        payload = response.json()
        if not payload.get("success", False):
            raise DashboardAPIError(payload.get("error") or f"GET {path} returned an error", response.status_code)
        return payload

    def _validated(self, rows: List[Dict[str, Any]], model: Type[BaseModel]) -> List[BaseModel]:
        return [model.model_validate(row) for row in rows]

    def fetch_features(self, level: MapLevel) -> List[BoundaryFeature]:
        payload = self._get(f"/boundaries/{level.value}")
        features = self._validated(payload["data"], BoundaryFeature)
        logger.info(f"Loaded {len(features)} {level.value} features")
        return features

    def fetch_records(self, dataset_key: str, year: Optional[int] = None) -> List[AdminRecord]:
        dataset = get_dataset(dataset_key)
        if dataset is None:
            raise DashboardAPIError(f"Unknown dataset: {dataset_key}")

        params = {"year": year} if year else None
        payload = self._get(f"/metrics/{dataset_key}", params)
        return self._validated(payload["data"], dataset.record_model)

    def fetch_agricultural_data(self, category: str = "all", subcategory: Optional[str] = None) -> Dict[str, Any]:
        params = {"category": category}
        if subcategory:
            params["subcategory"] = subcategory
        return self._get("/agricultural-data", params)["data"]
