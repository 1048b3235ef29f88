from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional, Sequence

from ..core.session import AWSSession
from .resource import Resource


class BaseResourcePlugin(ABC):
    service_name: str = ""

    def __init__(self, session: AWSSession):
        self.session = session

    @property
    def client(self) -> Any:
        return self.session.client(self.service_name)

    def _paginate(self, operation: str, result_key: str, **kwargs: Any) -> List[Any]:
        items: List[Any] = []
        for page in self.client.get_paginator(operation).paginate(**kwargs):
            items.extend(page.get(result_key, []))
        return items

    @abstractmethod
    def discover(self, names: Optional[Sequence[str]] = None) -> List[Resource]:
        """
        Discover the resources of this service in the session's region,
        restricted to ``names`` when given.
        """
        pass


def select_by_name(items: Iterable[Any], names: Optional[Sequence[str]], key=None) -> List[Any]:
    """Keep the items whose name is in ``names``; keep everything when no names are given."""
    key = key or (lambda item: item.name)
    items = list(items)
    if not names:
        return items
    return [item for item in items if key(item) in names]
