"""Shared plumbing for the per-resource clients."""

from __future__ import annotations

import asyncio
import builtins
from collections.abc import Collection
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import TransportError
from ..models import dump_request
from ..pager import Pager, Pagination, auto_page
from ..pager import single as select_single
from ..polling import PollingOptions, StateReader, poll_with_options
from ..query import ListOptions, with_query

if TYPE_CHECKING:
    from ..client import CloudFoundry

ModelT = TypeVar("ModelT", bound=BaseModel)
OptsT = TypeVar("OptsT", bound=ListOptions)


def validate(model_cls: type[ModelT], data: Any) -> ModelT:
    """Validate a response body, raising TransportError on an unexpected shape."""
    try:
        return model_cls.model_validate(data)
    except PydanticValidationError as e:
        raise TransportError(
            f"Unexpected {model_cls.__name__} response format from the Cloud Controller", e
        ) from e


def parse_list(data: dict[str, Any], model_cls: type[ModelT]) -> tuple[list[ModelT], Pager]:
    """Split a list envelope into typed resources and a Pager."""
    pagination = validate(Pagination, data.get("pagination") or {})
    resources = [validate(model_cls, r) for r in data.get("resources") or []]
    return resources, Pager(pagination)


def parse_included(data: dict[str, Any], name: str, model_cls: type[ModelT]) -> list[ModelT]:
    """Typed resources from the ``included`` block of a response, keyed by ``name``."""
    included = (data.get("included") or {}).get(name) or []
    return [validate(model_cls, r) for r in included]


def first_included(data: dict[str, Any], name: str, model_cls: type[ModelT], owner: str) -> ModelT:
    """The first ``name`` resource included in a single-resource response."""
    found = parse_included(data, name, model_cls)
    if not found:
        raise TransportError(f"{owner} response did not include its {name[:-1]}")
    return found[0]


class BaseClient:
    """Holds the API client and the request helpers every resource uses."""

    def __init__(self, client: CloudFoundry) -> None:
        self._client = client

    async def _get(self, path: str, model_cls: type[ModelT]) -> ModelT:
        return validate(model_cls, await self._client.get(path))

    async def _post(self, path: str, body: BaseModel | dict | None, model_cls: type[ModelT]) -> ModelT:
        payload = dump_request(body) if isinstance(body, BaseModel) else body
        return validate(model_cls, await self._client.post(path, payload))

    async def _patch(self, path: str, body: BaseModel | dict, model_cls: type[ModelT]) -> ModelT:
        payload = dump_request(body) if isinstance(body, BaseModel) else body
        return validate(model_cls, await self._client.patch(path, payload))

    async def _list_page(
        self, path: str, opts: ListOptions | None, model_cls: type[ModelT]
    ) -> tuple[list[ModelT], Pager]:
        return parse_list(await self._client.get(with_query(path, opts)), model_cls)

    async def _list_all(
        self, path: str, opts: OptsT, model_cls: type[ModelT]
    ) -> list[ModelT]:
        async def fetch(o: OptsT) -> tuple[list[ModelT], Pager]:
            return await self._list_page(path, o, model_cls)

        return await auto_page(opts, fetch, max_pages=self._client.max_pages)

    async def _list_page_included(
        self,
        path: str,
        opts: ListOptions,
        model_cls: type[ModelT],
        included: dict[str, type[BaseModel]],
    ) -> tuple[list[ModelT], dict[str, list[Any]], Pager]:
        data = await self._client.get(with_query(path, opts))
        resources, pager = parse_list(data, model_cls)
        return resources, {n: parse_included(data, n, cls) for n, cls in included.items()}, pager

    async def _list_all_included(
        self,
        path: str,
        opts: OptsT,
        model_cls: type[ModelT],
        included: dict[str, type[BaseModel]],
    ) -> tuple[list[ModelT], dict[str, list[Any]]]:
        """Every page of a collection plus the resources included alongside it.

        Included resources repeat across pages when several items share a
        parent; they are returned once each, in first-seen order.
        """
        gathered: dict[str, dict[str, Any]] = {n: {} for n in included}

        async def fetch(o: OptsT) -> tuple[list[ModelT], Pager]:
            resources, extra, pager = await self._list_page_included(path, o, model_cls, included)
            for name, found in extra.items():
                for r in found:
                    gathered[name].setdefault(r.guid, r)
            return resources, pager

        resources = await auto_page(opts, fetch, max_pages=self._client.max_pages)
        return resources, {n: list(by_guid.values()) for n, by_guid in gathered.items()}

    async def _poll(
        self,
        fetch_state: StateReader,
        success_states: Collection[str],
        failure_states: Collection[str],
        options: PollingOptions | None,
        cancel: asyncio.Event | None,
    ) -> str:
        return await poll_with_options(
            fetch_state,
            success_states,
            failure_states,
            options or self._client.polling,
            cancel,
        )


class ResourceClient(BaseClient, Generic[ModelT, OptsT]):
    """A resource with a top-level collection: list, list_all, single, get.

    Subclasses bind the collection path, model, options type and a
    human-readable name; everything else is shared.
    """

    path: ClassVar[str]
    model: ClassVar[type[BaseModel]]
    options: ClassVar[type[ListOptions]]
    resource_name: ClassVar[str] = "resource"

    async def list(self, opts: OptsT | None = None) -> tuple[list[ModelT], Pager]:
        """Fetch one page of the collection."""
        if opts is None:
            opts = self.options()  # type: ignore[assignment]
        return await self._list_page(self.path, opts, self.model)  # type: ignore[return-value]

    async def list_all(self, opts: OptsT | None = None) -> builtins.list[ModelT]:
        """Fetch every page of the collection."""
        if opts is None:
            opts = self.options()  # type: ignore[assignment]
        return await self._list_all(self.path, opts, self.model)  # type: ignore[arg-type]

    async def single(self, opts: OptsT) -> ModelT:
        """Return the one resource matching ``opts``.

        Raises:
            NotFoundError: If nothing matches.
            AmbiguousResultError: If more than one resource matches.
        """
        return await select_single(opts, self.list, self.resource_name)

    async def get(self, guid: str) -> ModelT:
        """Get a resource by GUID."""
        return await self._get(f"{self.path}/{guid}", self.model)  # type: ignore[return-value]

    async def _delete(self, guid: str) -> str:
        return await self._client.delete(f"{self.path}/{guid}")
