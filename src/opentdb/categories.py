"""Question categories and the lookup table that resolves them."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional, Tuple

from . import config
from .errors import TransportError
from .payloads import CategoriesEnvelope, parse_payload

if TYPE_CHECKING:
    from .transport import Transport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Category:
    """A category as published by the service.

    ``id`` is ``None`` for categories seen on a question but missing from
    the lookup table; such values cannot be used as request filters.
    """

    id: Optional[int]
    name: str

    @property
    def parameter_name(self) -> str:
        return "category"

    @property
    def parameter_value(self) -> str:
        return str(self.id)

    def __str__(self) -> str:
        return f"C:{self.name}({self.id})"


class CategoryLookup:
    """Refreshable id/name table of the categories the service knows about.

    Starts empty. Nothing is fetched until ``refresh`` or ``refresh_async``
    is called; lookups against an empty table simply miss.
    """

    def __init__(self, categories: Iterable[Category] = ()) -> None:
        self._lock = threading.Lock()
        self._categories: Tuple[Category, ...] = tuple(categories)
        self._loaded = bool(self._categories)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def load(self, categories: Iterable[Category]) -> None:
        snapshot = tuple(categories)
        with self._lock:
            self._categories = snapshot
            self._loaded = True
        logger.info("Loaded %d OpenTDB categories", len(snapshot))

    def refresh(self, transport: "Transport") -> None:
        try:
            body = transport.get_json(config.CATEGORY_PATH)
        except TransportError:
            logger.error("Failed to fetch OpenTDB categories", exc_info=True)
            raise
        self.load(self._parse(body))

    async def refresh_async(self, transport: "Transport") -> None:
        try:
            body = await transport.get_json_async(config.CATEGORY_PATH)
        except TransportError:
            logger.error("Failed to fetch OpenTDB categories", exc_info=True)
            raise
        self.load(self._parse(body))

    @staticmethod
    def _parse(body: object) -> Tuple[Category, ...]:
        envelope = parse_payload(CategoriesEnvelope, body)
        categories = tuple(Category(id=item.id, name=item.name) for item in envelope.trivia_categories)
        for category in categories:
            logger.debug("Found OpenTDB category: %s", category)
        return categories

    def all(self) -> Tuple[Category, ...]:
        return self._categories

    def by_id(self, category_id: int) -> Optional[Category]:
        for category in self._categories:
            if category.id == category_id:
                return category
        return None

    def by_name(self, name: str) -> Optional[Category]:
        for category in self._categories:
            if category.name == name:
                return category
        return None

    def resolve(self, name: str) -> Category:
        """Return the known category for ``name`` or an id-less placeholder."""
        return self.by_name(name) or Category(id=None, name=name)
