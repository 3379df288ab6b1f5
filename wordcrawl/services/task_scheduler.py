"""Schedulers that run a tree of crawl tasks to completion.

A scheduler is handed the root tasks and a `compute(task) -> children`
callable. It returns once every task reachable from the roots has been
computed, or raises `CrawlTaskError` for the first task whose `compute`
raised.
"""
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional, Tuple

from wordcrawl.domain.crawl_task import CrawlTask
from wordcrawl.exceptions import CrawlTaskError

logger = logging.getLogger(__name__)

ComputeFn = Callable[[CrawlTask], List[CrawlTask]]


class SequentialTaskScheduler:
    """Depth-first traversal on the calling thread.

    Uses an explicit stack, so link chains deeper than the interpreter's
    recursion limit are crawled like any other.
    """

    def run(self, roots: Iterable[CrawlTask], compute: ComputeFn) -> None:
        stack = list(roots)
        stack.reverse()
        while stack:
            task = stack.pop()
            try:
                children = compute(task)
                # Reversed so the first link is visited next.
                stack.extend(reversed(children))
            except Exception as e:
                logger.error("Unexpected failure crawling %s", task.url, exc_info=True)
                raise CrawlTaskError(task.url, e) from e


class _TaskNode:
    """One task in the fork-join tree.

    `_pending` counts the task itself plus every child that has not completed.
    When it drops to zero the node is complete and releases its parent, so a
    parent never completes before its descendants.
    """

    __slots__ = ("task", "parent", "_pending", "_lock", "_on_root_done")

    def __init__(self, task: CrawlTask, parent: Optional["_TaskNode"] = None, on_root_done=None):
        self.task = task
        self.parent = parent
        self._pending = 1
        self._lock = threading.Lock()
        self._on_root_done = on_root_done

    def fork(self, count: int) -> None:
        with self._lock:
            self._pending += count

    def release(self) -> None:
        # Walks up iteratively; a chain can be deeper than the recursion limit.
        node = self
        while True:
            with node._lock:
                node._pending -= 1
                if node._pending > 0:
                    return
            if node.parent is None:
                break
            node = node.parent
        if node._on_root_done is not None:
            node._on_root_done(node)


class _ForkJoinRun:
    def __init__(self, executor: ThreadPoolExecutor, compute: ComputeFn, root_count: int):
        self._executor = executor
        self._compute = compute
        self._submit_lock = threading.Lock()
        self._closed = False
        self._state_lock = threading.Lock()
        self._outstanding_roots = root_count
        self.fault: Optional[Tuple[str, Exception]] = None
        self.finished = threading.Event()

    def submit(self, node: _TaskNode) -> None:
        with self._submit_lock:
            if not self._closed:
                self._executor.submit(self._execute, node)
                return
        # The run was abandoned after a fault; settle the node without running it.
        node.release()

    def root_done(self, node: _TaskNode) -> None:
        logger.debug("Seed %s finished", node.task.url)
        with self._state_lock:
            self._outstanding_roots -= 1
            all_done = self._outstanding_roots == 0
        if all_done:
            self.finished.set()

    def close(self) -> None:
        with self._submit_lock:
            self._closed = True
        # On a fault, running siblings are left to finish in the background.
        self._executor.shutdown(wait=self.fault is None and self.finished.is_set())

    def _execute(self, node: _TaskNode) -> None:
        # Nothing reads the executor's futures: every failure must reach _record_fault.
        try:
            children = self._compute(node.task)
            child_nodes = [_TaskNode(child, node) for child in children]
            node.fork(len(child_nodes))
            for child_node in child_nodes:
                self.submit(child_node)
            node.release()
        except Exception as e:
            self._record_fault(node.task.url, e)

    def _record_fault(self, url: str, error: Exception) -> None:
        logger.error("Unexpected failure crawling %s", url, exc_info=error)
        with self._state_lock:
            if self.fault is None:
                self.fault = (url, error)
        self.finished.set()


class ForkJoinTaskScheduler:
    """Runs the task tree on a fixed-size thread pool.

    Workers never wait on their children, so a pool of any size can run a
    tree of any depth. `parallelism` bounds how many pages are parsed at once.
    """

    def __init__(self, parallelism: int):
        if parallelism < 1:
            raise ValueError("parallelism must be >= 1")
        self.parallelism = parallelism

    def run(self, roots: Iterable[CrawlTask], compute: ComputeFn) -> None:
        roots = list(roots)
        if not roots:
            return
        executor = ThreadPoolExecutor(max_workers=self.parallelism, thread_name_prefix="wordcrawl")
        run = _ForkJoinRun(executor, compute, len(roots))
        try:
            for root in roots:
                run.submit(_TaskNode(root, on_root_done=run.root_done))
            run.finished.wait()
        finally:
            run.close()
        if run.fault is not None:
            url, error = run.fault
            raise CrawlTaskError(url, error) from error
