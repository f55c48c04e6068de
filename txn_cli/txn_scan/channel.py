"""Request/response plumbing between a page reader and its caller.

A caller sends a :class:`ScanRequest` through a :class:`RequestChannel` and
always gets a :class:`ScanResponse` envelope back. Access failures (an
unreadable page, a responder that never answers, no responder at all) come
back as ``success=False`` with an error message. The scanning engine itself
stays synchronous and is only invoked once the page payload is available.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Sequence
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FuturesTimeoutError
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from txn_cli.shared.exceptions import (
    ChannelError,
    ChannelTimeoutError,
    NoResponderError,
    TxnScanError,
)

from .parsers.html_loader import HtmlDocument, load_html_document, parse_html_document
from .samples import make_fallback, no_fallback
from .scanner import scan_with_summary
from .sites import DEFAULT_SITE_RULES, GENERIC_SOURCE, SiteRule, detect_site
from .types import ScanSummary, Transaction

_log = logging.getLogger(__name__)

PARSE_ACTION = "parseTransactions"
DEFAULT_TIMEOUT_SECONDS = 5.0


@dataclass(frozen=True, slots=True)
class ScanRequest:
    """Ask a responder to scan a page given as markup or as a saved file."""

    html: str | None = None
    path: Path | None = None
    url: str | None = None
    source: str | None = None
    action: str = PARSE_ACTION


@dataclass(frozen=True, slots=True)
class ScanResponse:
    success: bool
    transactions: Sequence[Transaction] | None = None
    error: str | None = None
    source: str | None = None
    summary: ScanSummary | None = None

    @classmethod
    def ok(
        cls,
        transactions: Sequence[Transaction],
        *,
        source: str | None = None,
        summary: ScanSummary | None = None,
    ) -> ScanResponse:
        return cls(success=True, transactions=transactions, source=source, summary=summary)

    @classmethod
    def failure(cls, error: str) -> ScanResponse:
        return cls(success=False, error=error)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"success": self.success}
        if self.transactions is not None:
            payload["transactions"] = [txn.to_payload() for txn in self.transactions]
        if self.error is not None:
            payload["error"] = self.error
        return payload


Responder = Callable[[ScanRequest], ScanResponse]


def handle_scan_request(
    request: ScanRequest,
    *,
    site_rules: Sequence[SiteRule] = DEFAULT_SITE_RULES,
    default_source: str = GENERIC_SOURCE,
    use_fallback: bool = True,
) -> ScanResponse:
    """Scan the requested page and wrap the outcome in an envelope."""

    if request.action != PARSE_ACTION:
        return ScanResponse.failure(f"Unsupported action '{request.action}'.")
    try:
        document = _load_document(request)
    except TxnScanError as exc:
        _log.debug("Page access failed: %s", exc)
        return ScanResponse.failure(str(exc))

    label = request.source or detect_site(
        request.url or document.url,
        site_rules,
        default=default_source,
    )
    fallback = make_fallback(label) if use_fallback else no_fallback
    result = scan_with_summary(document.tables, label, fallback)
    return ScanResponse.ok(result.transactions, source=label, summary=result.summary)


def _load_document(request: ScanRequest) -> HtmlDocument:
    if request.path is not None:
        return load_html_document(request.path)
    if request.html is not None:
        return parse_html_document(request.html)
    raise ChannelError("Scan request carries neither markup nor a page path.")


class RequestChannel:
    """Deliver requests to a responder with a timeout.

    When no responder is attached and a ``loader`` is available, the loader is
    called once to install one and the request is retried a single time.
    """

    def __init__(
        self,
        responder: Responder | None = None,
        *,
        loader: Callable[[], Responder] | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._responder = responder
        self._loader = loader
        self.timeout = timeout

    @property
    def has_responder(self) -> bool:
        return self._responder is not None

    def send(self, request: ScanRequest) -> ScanResponse:
        try:
            return self._dispatch(request)
        except NoResponderError as exc:
            if self._loader is None:
                return ScanResponse.failure(str(exc))
            _log.debug("No responder (%s); loading one and retrying", exc)
            try:
                self._responder = self._loader()
            except Exception as load_exc:
                _log.debug("Responder loader failed: %s", load_exc)
                return ScanResponse.failure(f"Could not load a responder: {load_exc}")
            try:
                return self._dispatch(request)
            except ChannelError as retry_exc:
                return ScanResponse.failure(str(retry_exc))
        except ChannelError as exc:
            return ScanResponse.failure(str(exc))

    def _dispatch(self, request: ScanRequest) -> ScanResponse:
        if self._responder is None:
            raise NoResponderError("No responder is attached to the channel.")
        future = _start_daemon(self._responder, request)
        try:
            return future.result(timeout=self.timeout)
        except FuturesTimeoutError as exc:
            raise ChannelTimeoutError(f"No response within {self.timeout:g}s.") from exc
        except ChannelError:
            raise
        except Exception as exc:
            raise ChannelError(f"Responder failed: {exc}") from exc


def _start_daemon(responder: Responder, request: ScanRequest) -> Future[ScanResponse]:
    """Run ``responder`` on a daemon thread so a hung call never blocks exit."""

    future: Future[ScanResponse] = Future()

    def run() -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            future.set_result(responder(request))
        except Exception as exc:
            future.set_exception(exc)

    threading.Thread(target=run, name="txn-scan-responder", daemon=True).start()
    return future
