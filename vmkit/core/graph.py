"""
Cycle detection for directed graphs.

Iterative depth-first search with three visit states. Each stack frame
holds a node and the iterator over its outgoing edges, so arbitrarily deep
graphs never hit the recursion limit.
"""
from enum import Enum
from typing import Callable, Dict, Hashable, Iterable, Iterator, List, Mapping, Tuple, TypeVar

T = TypeVar("T", bound=Hashable)


class VisitState(Enum):
    NOT_VISITED = 0
    VISITING = 1
    VISITED = 2


_EXHAUSTED = object()


def _try_push(node: T,
              edges: Callable[[T], Iterable[T]],
              stack: List[Tuple[T, Iterator[T]]],
              visited: Dict[T, VisitState],
              cycles: List[List[T]]) -> None:
    state = visited.get(node, VisitState.NOT_VISITED)
    if state is VisitState.VISITED:
        return

    if state is VisitState.VISITING:
        # Walk the active path from the top of the stack back to `node`
        path = []
        for parent, _ in reversed(stack):
            if parent == node:
                break
            path.append(parent)
        path.append(node)
        path.reverse()
        path.append(node)
        cycles.append(path)
        return

    visited[node] = VisitState.VISITING
    stack.append((node, iter(edges(node) or ())))


def _find_cycles_from(root: T,
                      edges: Callable[[T], Iterable[T]],
                      visited: Dict[T, VisitState]) -> List[List[T]]:
    stack: List[Tuple[T, Iterator[T]]] = []
    cycles: List[List[T]] = []

    _try_push(root, edges, stack, visited, cycles)
    while stack:
        node, successors = stack[-1]
        successor = next(successors, _EXHAUSTED)
        if successor is _EXHAUSTED:
            stack.pop()
            visited[node] = VisitState.VISITED
        else:
            _try_push(successor, edges, stack, visited, cycles)

    return cycles


def find_cycles(nodes: Iterable[T], edges: Callable[[T], Iterable[T]]) -> List[List[T]]:
    """
    Find cycles reachable from `nodes`.

    Args:
        nodes: Start nodes, visited in order
        edges: Callable returning the successors of a node

    Returns:
        List of cycles. Each cycle starts and ends with the same node,
        e.g. ``[A, B, A]`` for A -> B -> A and ``[A, A]`` for a self-loop.
        Empty when the graph is acyclic.
    """
    cycles: List[List[T]] = []
    visited: Dict[T, VisitState] = {}
    for node in nodes:
        cycles.extend(_find_cycles_from(node, edges, visited))
    return cycles


def find_cycles_in_mapping(adjacency: Mapping[T, Iterable[T]]) -> List[List[T]]:
    """Find cycles in an adjacency mapping; missing keys have no edges."""
    return find_cycles(list(adjacency.keys()), lambda node: adjacency.get(node) or ())
