import asyncio
from typing import Dict, List, Optional

import pytest

from typeahead.models.schemas import ResultRecord, SearchRequest
from typeahead.services.base import SearchService
from typeahead.services.result_set import ResultSet
from typeahead.widgets.autocomplete_controller import AutocompleteController
from typeahead.widgets.elements import ListMount, TextField


def make_record(title: str, slug: str, post_type: str = "post") -> ResultRecord:
    return ResultRecord(title=title, url=f"example.com/{slug}", post_type=post_type, slug=slug)


class StubSearchService(SearchService):
    """Answers from a keyword → records table; keywords with a gate wait for it to be set."""

    name = "stub"

    def __init__(self, results: Optional[Dict[str, List[ResultRecord]]] = None, error: Optional[Exception] = None):
        self.results = results or {}
        self.error = error
        self.requests: List[SearchRequest] = []
        self.gates: Dict[str, asyncio.Event] = {}

    def gate(self, keyword: str) -> asyncio.Event:
        return self.gates.setdefault(keyword, asyncio.Event())

    async def search(self, request: SearchRequest) -> List[ResultRecord]:
        self.requests.append(request)
        if request.keyword in self.gates:
            await self.gates[request.keyword].wait()
        if self.error is not None:
            raise self.error
        return self.results.get(request.keyword, [])

    async def is_available(self) -> bool:
        return True

    @property
    def keywords(self) -> List[str]:
        return [request.keyword for request in self.requests]


async def settle(seconds: float = 0.05) -> None:
    await asyncio.sleep(seconds)


@pytest.fixture
def records():
    return [
        make_record("Tomato soup", "tomato-soup"),
        make_record("Soup dumplings", "soup-dumplings"),
        make_record("Pea soup", "pea-soup"),
    ]


@pytest.fixture
def search_service(records):
    return StubSearchService({"soup": records})


@pytest.fixture
def widget(search_service):
    """Factory for a rendered controller bound to an in-memory field and mount."""

    def build(**options):
        options.setdefault("debounce_ms", 0)
        field = TextField()
        mount = ListMount()
        controller = AutocompleteController(
            ResultSet(search_service), input=field, wrapper=mount, **options
        )
        controller.render()
        return controller, field, mount

    return build
