"""Contract between invoices and the remote accounting service."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .invoice import Invoice


class Gateway(Protocol):
    """Capability used by :class:`~xeroxml.invoice.Invoice` for remote calls.

    Transport, authentication and retries are the implementer's concern.
    A gateway may additionally expose ``build_contact(**fields)``. Invoices
    hold their gateway through :func:`weakref.ref`, so gateway objects must
    be weak-referenceable (no ``__slots__`` without ``__weakref__``) and kept
    alive by the caller.
    """

    def fetch_invoice_by_id(self, invoice_id: str) -> "Response":
        """Return the response for ``GET Invoices/{invoice_id}``."""

    def create_invoice(self, invoice: "Invoice") -> "Response":
        """Send ``invoice`` to the service and return its response."""


class Response:
    """Result of a gateway call.

    ``response_item`` holds the deserialised payload; :attr:`invoice` and
    :attr:`invoices` are views over it.
    """

    def __init__(
        self,
        *,
        status: str | None = None,
        response_item: Any = None,
        errors: list[str] | None = None,
        response_id: str | None = None,
        provider: str | None = None,
        date_time: Any = None,
        request_params: dict[str, str] | None = None,
        request_xml: str | None = None,
        response_xml: str | None = None,
    ) -> None:
        self.status = status
        self.response_item = response_item if response_item is not None else []
        self.errors = errors or []
        self.response_id = response_id
        self.provider = provider
        self.date_time = date_time
        self.request_params = request_params or {}
        self.request_xml = request_xml
        self.response_xml = response_xml

    @property
    def success(self) -> bool:
        return self.status == "OK"

    @property
    def error(self) -> str | None:
        """Return the first reported error, if any."""

        return self.errors[0] if self.errors else None

    @property
    def invoice(self) -> Any:
        item = self.response_item
        if isinstance(item, list):
            return item[0] if item else None
        return item

    @property
    def invoices(self) -> list[Any]:
        item = self.response_item
        if isinstance(item, list):
            return list(item)
        return [item]

    def __repr__(self) -> str:
        return f"Response(status={self.status!r}, errors={self.errors!r})"


__all__ = ["Gateway", "Response"]
