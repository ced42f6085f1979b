# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Order-preserving, stack-safe traversal shared by the rope builders."""

from __future__ import annotations

from collections.abc import Callable, Iterator

type ChildrenOf[N] = Callable[[N], tuple[N, ...] | None]


def iter_leaves[N](root: N, children: ChildrenOf[N]) -> Iterator[N]:
    """Yield the leaves under ``root`` in left-to-right, depth-first order.

    ``children`` returns the ordered children of a composite node, or ``None``
    for a leaf. The traversal keeps an explicit stack of partially consumed
    sibling iterators instead of recursing, so the Python call stack stays
    flat no matter how deeply the tree is nested. Entering a composite pushes
    its children ahead of whatever remains of the current sibling list.
    """

    pending: list[Iterator[N]] = [iter((root,))]
    while pending:
        for node in pending[-1]:
            nested = children(node)
            if nested is None:
                yield node
                continue
            pending.append(iter(nested))
            break
        else:
            pending.pop()


__all__ = ["ChildrenOf", "iter_leaves"]
