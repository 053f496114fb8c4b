"""
Staged reveal of nodes and connectors.

A freshly laid-out workflow is shown one node at a time, with connectors
following one tick behind. The algorithm is a pure transition,
``advance(state) -> state``, so it can be driven by any clock: a test
calling it in a loop, an animation-frame callback, or the asyncio driver
at the bottom of this module.

For a three-node workflow the counters go (nodes, connectors):

    (0, 0) -> (1, 0) -> (2, 0) -> (3, 1) -> (3, 2)

and stay at (3, 2) from then on.

Every reset or seek bumps a generation number. A tick that carries an
older generation is dropped, so a timer scheduled for a previous node list
can never advance the counters of the current one.
"""

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Callable, List, Optional

from .errors import InvalidArgumentError

logger = logging.getLogger(__name__)

# Delay between reveal ticks, in seconds
TICK_INTERVAL = 0.150


@dataclass(frozen=True)
class RevealState:
    """
    Counters controlling which nodes and connectors are visible.

    Attributes:
        node_count: Number of nodes in the current list.
        nodes_revealed: Nodes currently visible, from index 0 upward.
        connectors_revealed: Connectors currently visible, from index 0 upward.
        generation: Token identifying the node list these counters belong to.
    """

    node_count: int
    nodes_revealed: int = 0
    connectors_revealed: int = 0
    generation: int = 0

    def __post_init__(self):
        if self.node_count < 0:
            raise InvalidArgumentError(
                f"node_count must not be negative, got {self.node_count}"
            )
        if not 0 <= self.nodes_revealed <= self.node_count:
            raise InvalidArgumentError(
                f"nodes_revealed must be within 0..{self.node_count}, "
                f"got {self.nodes_revealed}"
            )
        if not 0 <= self.connectors_revealed <= max(0, self.nodes_revealed - 1):
            raise InvalidArgumentError(
                f"connectors_revealed ({self.connectors_revealed}) must not exceed "
                f"nodes_revealed - 1 ({self.nodes_revealed - 1})"
            )

    @property
    def connector_total(self) -> int:
        return max(0, self.node_count - 1)

    @property
    def is_terminal(self) -> bool:
        return (
            self.nodes_revealed == self.node_count
            and self.connectors_revealed == self.connector_total
        )


def advance(state: RevealState) -> RevealState:
    """
    Apply one reveal tick.

    Both counters are advanced from the pre-tick state: a node is revealed
    while any remain hidden, and a connector is revealed once at least two
    nodes were already visible and a connector between visible nodes is
    still hidden. A terminal state is returned unchanged.
    """
    nodes = state.nodes_revealed
    connectors = state.connectors_revealed

    next_nodes = nodes + 1 if nodes < state.node_count else nodes
    next_connectors = connectors
    if nodes > 1 and connectors < nodes - 1:
        next_connectors = connectors + 1

    if next_nodes == nodes and next_connectors == connectors:
        return state
    return replace(state, nodes_revealed=next_nodes, connectors_revealed=next_connectors)


class RevealScheduler:
    """
    Owns the reveal state for one canvas.

    The scheduler does not keep time itself. Call tick() from whatever
    clock drives the animation; pass the generation returned by reset() or
    seek() to have ticks from a superseded node list ignored.

    Example:
        >>> scheduler = RevealScheduler(3)
        >>> for _ in range(4):
        ...     scheduler.tick()
        >>> scheduler.nodes_revealed, scheduler.connectors_revealed
        (3, 2)
    """

    def __init__(self, node_count: int = 0):
        self._state = RevealState(node_count=node_count)

    @property
    def state(self) -> RevealState:
        return self._state

    @property
    def generation(self) -> int:
        return self._state.generation

    @property
    def node_count(self) -> int:
        return self._state.node_count

    @property
    def nodes_revealed(self) -> int:
        return self._state.nodes_revealed

    @property
    def connectors_revealed(self) -> int:
        return self._state.connectors_revealed

    @property
    def is_terminal(self) -> bool:
        return self._state.is_terminal

    def reset(self, node_count: int) -> int:
        """
        Start over for a new node list of ``node_count`` nodes.

        Progress on the previous list is discarded.

        Returns:
            The new generation token.
        """
        self._state = RevealState(
            node_count=node_count, generation=self._state.generation + 1
        )
        logger.debug(
            "Reveal reset for %d nodes (generation %d)",
            node_count,
            self._state.generation,
        )
        return self._state.generation

    def seek(self, nodes_revealed: int, node_count: Optional[int] = None) -> int:
        """
        Jump to ``nodes_revealed`` visible nodes with all their connectors.

        Used when a list is edited in place: after appending a node only the
        new node should animate in, and after an undo or a removal the whole
        list is shown at once.

        Args:
            nodes_revealed: Number of nodes to show.
            node_count: New list length. Defaults to the current one.

        Returns:
            The new generation token.

        Raises:
            InvalidArgumentError: If ``nodes_revealed`` exceeds the node count.
        """
        if node_count is None:
            node_count = self._state.node_count
        self._state = RevealState(
            node_count=node_count,
            nodes_revealed=nodes_revealed,
            connectors_revealed=max(0, nodes_revealed - 1),
            generation=self._state.generation + 1,
        )
        logger.debug(
            "Reveal seek to %d/%d nodes (generation %d)",
            nodes_revealed,
            node_count,
            self._state.generation,
        )
        return self._state.generation

    def tick(self, generation: Optional[int] = None) -> bool:
        """
        Advance the reveal by one step.

        Args:
            generation: Token the tick was scheduled under. A tick from an
                earlier generation is ignored.

        Returns:
            True if the tick applied to the current generation, False if it
            was stale.
        """
        if generation is not None and generation != self._state.generation:
            logger.debug(
                "Dropping stale reveal tick (generation %d, current %d)",
                generation,
                self._state.generation,
            )
            return False
        self._state = advance(self._state)
        return True

    def is_node_visible(self, index: int) -> bool:
        return 0 <= index < self._state.nodes_revealed

    def is_connector_visible(self, index: int) -> bool:
        return 0 <= index < self._state.connectors_revealed

    def visible_node_indices(self) -> List[int]:
        return list(range(self._state.nodes_revealed))

    def visible_connector_indices(self) -> List[int]:
        return list(range(self._state.connectors_revealed))


class AsyncRevealDriver:
    """
    Ticks a RevealScheduler on an asyncio event loop.

    - start(): begin ticking every ``interval`` seconds until terminal
    - cancel(): stop the pending tick
    - restart(): reset the scheduler for a new list and start again
    - wait(): await the current run

    Must be started from within a running event loop.
    """

    def __init__(
        self,
        scheduler: RevealScheduler,
        interval: float = TICK_INTERVAL,
        on_tick: Optional[Callable[[RevealState], None]] = None,
    ):
        if interval < 0:
            raise InvalidArgumentError(f"interval must not be negative, got {interval}")
        self.scheduler = scheduler
        self.interval = interval
        self.on_tick = on_tick
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        generation = self.scheduler.generation
        self._task = asyncio.get_running_loop().create_task(self._run(generation))

    async def _run(self, generation: int) -> None:
        while not self.scheduler.is_terminal:
            await asyncio.sleep(self.interval)
            if not self.scheduler.tick(generation):
                break
            if self.on_tick is not None:
                self.on_tick(self.scheduler.state)

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def restart(self, node_count: int) -> int:
        """Cancel any pending tick, reset the scheduler and start again."""
        self.cancel()
        generation = self.scheduler.reset(node_count)
        self.start()
        return generation

    async def wait(self) -> None:
        """Wait until the current run reaches terminal state or stops."""
        if self._task is None:
            return
        await self._task
