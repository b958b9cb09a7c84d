"""Deduplicating, depth-aware crawl over referenced issues and pull requests."""

import asyncio
import logging
import threading
from collections.abc import Awaitable, Callable

from ..github_client.models import Identity, NodeData
from ..references.parser import ReferenceParser, parse_github_url
from .events import CrawlEventSink, NodeError, NodeFound, ReferenceFound, WorkItem

logger = logging.getLogger(__name__)

FetchNode = Callable[[str, str, int], Awaitable[NodeData]]


class GitHubCrawler:
    """Crawl the reference graph starting from one or more seeds.

    Work is kept on a LIFO stack, so the most recently discovered
    neighbourhood is explored first. Every identity is fetched at most once
    per crawler instance; discovering it again through a shorter path only
    lowers its recorded depth.
    """

    def __init__(
        self,
        fetch_node: FetchNode,
        reference_parser: ReferenceParser,
        sink: CrawlEventSink,
        max_depth: int | None = None,
    ):
        """Initialize the crawler.

        Args:
            fetch_node: Coroutine function returning NodeData for
                ``(owner, repo, number)``; any exception marks the node failed
            reference_parser: Parser applied to bodies and comments
            sink: Receiver of crawl events
            max_depth: Work deeper than this is not queued; None for no limit
        """
        self.fetch_node = fetch_node
        self.reference_parser = reference_parser
        self.sink = sink
        self.max_depth = max_depth

        self._lock = threading.Lock()
        self._lookup: dict[str, WorkItem] = {}
        self._stack: list[WorkItem] = []
        self._in_flight = 0
        self._wakeup = asyncio.Event()
        self._cancel: asyncio.Event | None = None
        self._workers: list[asyncio.Task[None]] = []

    @property
    def pending(self) -> int:
        """Number of queued items not yet picked up by a worker."""
        with self._lock:
            return len(self._stack)

    @property
    def running(self) -> bool:
        """Whether any worker of the current run is still active."""
        return any(not worker.done() for worker in self._workers)

    def get_work(self, identity: Identity) -> WorkItem | None:
        """Return the tracked work item for an identity, if any."""
        with self._lock:
            return self._lookup.get(identity.key)

    def seed(self, url: str) -> WorkItem:
        """Queue the issue or pull request at ``url`` at depth 0.

        Raises:
            MalformedUrlError: If the URL is not an issue or pull request URL
        """
        work = WorkItem(identity=parse_github_url(url), depth=0)
        self.enqueue(work)
        return work

    def enqueue(self, work: WorkItem) -> bool:
        """Queue work unless its identity is already known.

        A known identity only has its depth lowered, it is never processed
        twice.

        Returns:
            True if the work was newly queued
        """
        identity = work.identity
        if not (identity.owner and identity.repo and identity.number):
            raise ValueError(f"Work item is missing owner, repo or number: {work!r}")

        if self.max_depth is not None and work.depth > self.max_depth:
            logger.debug(f"Not queueing {identity} beyond max depth {work.depth}")
            return False

        lowered = False
        with self._lock:
            existing = self._lookup.get(identity.key)
            if existing is not None:
                if existing.depth > work.depth:
                    existing.depth = work.depth
                    existing.source = work.source
                    lowered = True
            else:
                self._lookup[identity.key] = work
                self._stack.append(work)

        if lowered:
            logger.debug(f"Lowered depth of {identity} to {work.depth}")
            self.sink.on_depth_lowered(identity, work.depth)
            return False
        if existing is not None:
            return False

        logger.debug(f"Queued {identity} at depth {work.depth}")
        self._wakeup.set()
        return True

    def start(self, concurrency: int = 1) -> list[asyncio.Task[None]]:
        """Spawn workers on the running event loop.

        A run already in progress is cancelled first; its in-flight fetches
        still complete.
        """
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        if self._cancel is not None:
            self._cancel.set()
            self._wakeup.set()

        cancel = asyncio.Event()
        self._cancel = cancel
        # An asyncio.Event binds to the loop of its first waiter.
        self._wakeup = asyncio.Event()
        self._workers = [
            asyncio.create_task(self._worker(cancel), name=f"crawl-worker-{i}")
            for i in range(concurrency)
        ]
        logger.info(f"Started {concurrency} crawl worker(s)")
        return self._workers

    def stop(self) -> None:
        """Ask workers to exit after their current item."""
        if self._cancel is not None:
            self._cancel.set()
            self._wakeup.set()
            logger.info("Crawl stop requested")

    async def run(self, concurrency: int = 1) -> None:
        """Crawl until the queue is exhausted or ``stop()`` is called."""
        workers = self.start(concurrency)
        await asyncio.gather(*workers)

    def _claim(self) -> WorkItem | None:
        with self._lock:
            if not self._stack:
                return None
            self._in_flight += 1
            return self._stack.pop()

    def _idle(self) -> bool:
        with self._lock:
            return not self._stack and self._in_flight == 0

    async def _worker(self, cancel: asyncio.Event) -> None:
        while not cancel.is_set():
            work = self._claim()
            if work is None:
                if self._idle():
                    break
                # Another worker is still fetching and may queue more work.
                self._wakeup.clear()
                await self._wakeup.wait()
                continue

            try:
                await self.process_work(work)
            except Exception:
                logger.exception(f"Failed to process {work.identity}")
            finally:
                with self._lock:
                    self._in_flight -= 1
                self._wakeup.set()

    async def process_work(self, work: WorkItem) -> None:
        """Fetch one node, report it and queue everything it references."""
        identity = work.identity
        try:
            node = await self.fetch_node(identity.owner, identity.repo, identity.number)
        except Exception as e:
            logger.warning(f"Failed to fetch {identity}: {e}")
            self.sink.on_node_error(NodeError(work=work, error=e))
            return

        self.sink.on_node_found(
            NodeFound(identity=identity, depth=work.depth, node=node)
        )

        for timeline_source in node.timeline_sources:
            self.enqueue(
                WorkItem(
                    identity=timeline_source, source=identity, depth=work.depth + 1
                )
            )

        for text in [node.body, *node.comments]:
            self._handle_text(work, text)

    def _handle_text(self, work: WorkItem, text: str) -> None:
        for reference in self.reference_parser.get_references(work.identity, text):
            if reference.reference_type.follow:
                # Reversed aliases put the current node on the target side.
                neighbour = (
                    reference.source
                    if reference.target == work.identity
                    else reference.target
                )
                self.enqueue(
                    WorkItem(
                        identity=neighbour,
                        source=work.identity,
                        depth=work.depth + 1,
                    )
                )
            self.sink.on_reference_found(ReferenceFound(reference=reference))
