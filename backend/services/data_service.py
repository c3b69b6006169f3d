"""Fetch -> normalize -> cache, per logical dataset key."""

import logging

from config import Settings
from errors import UnknownDatasetError
from services.cache import TTLCache
from services.dataset import Dataset
from services.normalizer import normalize
from services.sheet_source import SheetFetcher

logger = logging.getLogger(__name__)

PRIMARY = "primary"
ADS = "ads"


class DataService:
    def __init__(self, sources: dict[str, str], fetcher: SheetFetcher, cache: TTLCache):
        self.sources = dict(sources)
        self.fetcher = fetcher
        self.cache = cache

    @classmethod
    def from_settings(cls, settings: Settings) -> "DataService":
        return cls(
            sources=settings.dataset_sources,
            fetcher=SheetFetcher(
                settings.export_url_template,
                timeout=settings.fetch_timeout_seconds,
            ),
            cache=TTLCache(
                ttl_seconds=settings.cache_ttl_seconds,
                single_flight=settings.cache_single_flight,
            ),
        )

    def _source_id(self, key: str) -> str:
        source_id = self.sources.get(key)
        if source_id is None:
            raise UnknownDatasetError(key, set(self.sources))
        return source_id

    def _producer(self, key: str):
        source_id = self._source_id(key)

        async def produce() -> Dataset:
            raw = await self.fetcher.fetch(source_id)
            headers, records = normalize(raw)
            logger.info("Loaded %s: %d records, %d fields", key, len(records), len(headers))
            return Dataset.build(source_id, headers, records)

        return produce

    async def get_data(self, key: str = PRIMARY) -> Dataset:
        return await self.cache.get_or_populate(key, self._producer(key))

    async def refresh(self, key: str = PRIMARY) -> Dataset:
        return await self.cache.force_populate(key, self._producer(key))

    async def get_field(self, key: str, field: str) -> list[str]:
        """Values of one column, in record order, blanks dropped."""
        dataset = await self.get_data(key)
        values = [record.get(field, "") for record in dataset.records]
        return [v for v in values if v.strip()]

    def status(self, key: str = PRIMARY) -> dict:
        self._source_id(key)
        return self.cache.status(key)
