###############################################################################
# Copyright (C) 2024 Oliver Michael Kamperis
# Email: olliekampo@gmail.com
#
# This program is free software: you can redistribute it and/or modify it under
# the terms of the GNU General Public License as published by the Free Software
# Foundation, either version 3 of the License, or any later version.
#
# This program is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS
# FOR A PARTICULAR PURPOSE. See the GNU General Public License for details.
#
# You should have received a copy of the GNU General Public License along with
# this program. If not, see <https://www.gnu.org/licenses/>.

"""Module containing an array based disjoint-set data structure."""

import enum
from numbers import Integral
from typing import Callable, Final, NamedTuple, overload

__copyright__ = "Copyright (C) 2024 Oliver Michael Kamperis"
__license__ = "GPL-3.0"
__version__ = "1.0.0"

__all__ = (
    "BalanceMetric",
    "CompressionMode",
    "UnionFindPolicy",
    "DisjointSet",
    "ALL_POLICIES",
    "DEPTH_NONE",
    "DEPTH_FULL",
    "DEPTH_HALVING",
    "SIZE_NONE",
    "SIZE_FULL",
    "SIZE_HALVING"
)


def __dir__() -> tuple[str, ...]:
    """Get the names of module attributes."""
    return __all__


class BalanceMetric(enum.Enum):
    """
    The per-root weight used to decide which root wins a union.

    Items
    -----
    `DEPTH` - The metric of a root is an upper bound on the number of
    elements on the longest path from a leaf to the root.

    `SIZE` - The metric of a root is the number of elements in its tree.
    """

    DEPTH = "depth"
    SIZE = "size"


class CompressionMode(enum.Enum):
    """
    The path compression performed by root finding.

    Items
    -----
    `NONE` - Walk to the root, never modify the path.

    `FULL` - Walk to the root, then walk the path again setting the parent of
    every visited element to the root.

    `HALVING` - Single pass, set the parent of every checked element to its
    grandparent and continue from the grandparent.
    """

    NONE = "none"
    FULL = "full"
    HALVING = "halving"


class UnionFindPolicy(NamedTuple):
    """
    The balancing metric and compression mode of a disjoint-set.

    Items
    -----
    `balance: BalanceMetric` - How the winning root of a union is chosen.

    `compression: CompressionMode` - How root finding compresses paths.
    """

    balance: BalanceMetric
    compression: CompressionMode

    @property
    def label(self) -> str:
        """Get the short name of the policy, for example `size-halving`."""
        return f"{self.balance.value}-{self.compression.value}"

    @property
    def description(self) -> str:
        """Get a human readable description of the policy."""
        compression = {
            CompressionMode.NONE: "without path compression",
            CompressionMode.FULL: "with two-pass path compression",
            CompressionMode.HALVING: "with path halving"
        }[self.compression]
        return (f"{self.balance.value.capitalize()} weighted quick union "
                f"{compression}")

    @classmethod
    def create(
        cls,
        balance: BalanceMetric | str,
        compression: CompressionMode | str
    ) -> "UnionFindPolicy":
        """
        Create a policy from enum members or their lower-case names.

        Raises
        ------
        `ValueError` - If either name is not a known metric or mode.
        """
        return cls(
            _as_member(BalanceMetric, balance),
            _as_member(CompressionMode, compression)
        )

    @classmethod
    def from_label(cls, label: str) -> "UnionFindPolicy":
        """
        Create a policy from its short name, such as `depth-none`.

        Raises
        ------
        `ValueError` - If the label is not of the form `<balance>-<mode>`.
        """
        balance, sep, compression = label.strip().lower().partition("-")
        if not sep:
            raise ValueError(
                f"Policy label must be of the form <balance>-<compression>. "
                f"Got; {label!r} instead."
            )
        return cls.create(balance, compression)


def _as_member(enum_type: type[enum.Enum], value: enum.Enum | str):
    """Convert a lower-case name to a member of the given enum."""
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(str(value).lower())
    except ValueError as error:
        names = ", ".join(member.value for member in enum_type)
        raise ValueError(
            f"Unknown {enum_type.__name__} {value!r}, "
            f"expected one of; {names}."
        ) from error


DEPTH_NONE: Final = UnionFindPolicy(BalanceMetric.DEPTH, CompressionMode.NONE)
DEPTH_FULL: Final = UnionFindPolicy(BalanceMetric.DEPTH, CompressionMode.FULL)
DEPTH_HALVING: Final = UnionFindPolicy(
    BalanceMetric.DEPTH, CompressionMode.HALVING)
SIZE_NONE: Final = UnionFindPolicy(BalanceMetric.SIZE, CompressionMode.NONE)
SIZE_FULL: Final = UnionFindPolicy(BalanceMetric.SIZE, CompressionMode.FULL)
SIZE_HALVING: Final = UnionFindPolicy(
    BalanceMetric.SIZE, CompressionMode.HALVING)

ALL_POLICIES: Final[tuple[UnionFindPolicy, ...]] = (
    DEPTH_NONE,
    DEPTH_FULL,
    DEPTH_HALVING,
    SIZE_NONE,
    SIZE_FULL,
    SIZE_HALVING
)


class DisjointSet:
    """
    A disjoint-set data structure, also called union-find, over the sites
    (integer elements) `0` through `n - 1`.

    Each disjoint component is stored as a tree, where every site holds the
    index of its parent, and the root of the tree (the unique site whose
    parent is itself) identifies the component. Finding the component of a
    site reduces to walking up its tree to the root, and unioning two
    components reduces to setting the parent of one root to the other root.

    Two choices control the shape of the trees:
    - the balancing metric, the smaller tree (by depth or by size) is always
      attached below the root of the larger tree, such that trees grow
      logarithmically rather than linearly,
    - the compression mode, which flattens the paths walked by root finding,
      making future look-ups on the same path cheaper.

    Under depth balancing the metric of a root is updated by the max rule;
    `metric[winner] = max(metric[winner], metric[loser] + 1)`, such that
    without compression it is exactly the number of sites on the longest path
    to the root, and with compression it is an upper bound on it. Under size
    balancing, the root of the second argument of a union wins ties.

    Example Usage
    -------------
    ```
    from quickunion.datastructures.disjointset import DisjointSet

    >>> dset = DisjointSet(5, balance="size", compression="halving")
    >>> dset.union(0, 1)
    1
    >>> dset.union(2, 3)
    3
    >>> dset.union(0, 3)
    3
    >>> dset.component_count()
    2
    >>> dset.connected(0, 2)
    True
    >>> dset.connected(0, 4)
    False
    ```
    """

    __slots__ = {
        "__parent": "The parent of each site.",
        "__metric": "The balancing metric of each root site.",
        "__components": "The number of disjoint components.",
        "__policy": "The balancing and compression policy.",
        "__find_root": "The root finding method selected by the policy."
    }

    @overload
    def __init__(
        self,
        n: int,
        policy: UnionFindPolicy = ...
    ) -> None:
        ...

    @overload
    def __init__(
        self,
        n: int, *,
        balance: BalanceMetric | str,
        compression: CompressionMode | str
    ) -> None:
        ...

    def __init__(
        self,
        n: int,
        policy: UnionFindPolicy | None = None, *,
        balance: BalanceMetric | str | None = None,
        compression: CompressionMode | str | None = None
    ) -> None:
        """
        Create a new disjoint-set with `n` sites, each in its own component.

        Parameters
        ----------
        `n: int` - The number of sites, they are named `0` through `n - 1`.

        `policy: UnionFindPolicy | None = None` - The balancing and
        compression policy. If not given, it is built from `balance` and
        `compression`, which default to size balancing and full compression.

        `balance: BalanceMetric | str | None = None` - The balancing metric,
        ignored if `policy` is given.

        `compression: CompressionMode | str | None = None` - The compression
        mode, ignored if `policy` is given.

        Raises
        ------
        `ValueError` - If `n` is not a non-negative integer, or the policy is
        not recognised.
        """
        if not isinstance(n, Integral) or isinstance(n, bool) or n < 0:
            raise ValueError(
                "Number of sites must be a non-negative integer. "
                f"Got; {n!r} of {type(n)!r} instead."
            )
        if policy is None:
            policy = UnionFindPolicy.create(
                BalanceMetric.SIZE if balance is None else balance,
                CompressionMode.FULL if compression is None else compression
            )
        elif not isinstance(policy, UnionFindPolicy):
            raise ValueError(
                "Policy must be a UnionFindPolicy. "
                f"Got; {policy!r} of {type(policy)!r} instead."
            )
        self.__policy: UnionFindPolicy = policy

        # Every site starts as the root of its own singleton tree, both
        # metrics agree that a singleton has weight one.
        n = int(n)
        self.__parent: list[int] = list(range(n))
        self.__metric: list[int] = [1] * n
        self.__components: int = n

        find_root: Callable[[int], int]
        if policy.compression is CompressionMode.NONE:
            find_root = self.__find_root_loop
        elif policy.compression is CompressionMode.FULL:
            find_root = self.__find_root_loop_compress
        else:
            find_root = self.__find_root_path_halve
        self.__find_root: Callable[[int], int] = find_root

    def __str__(self) -> str:
        """
        Return a string summary of the disjoint-set, including its parents
        and metrics.
        """
        return (f"Disjoint-Set [{self.__policy.label}]: "
                f"total sites = {len(self.__parent)}, "
                f"total components = {self.__components}, "
                f"parents = {self.__parent}, "
                f"metrics = {self.__metric}")

    def __repr__(self) -> str:
        """Return a short representation of the disjoint-set."""
        return (f"{self.__class__.__name__}({len(self.__parent)}, "
                f"{self.__policy!r})")

    def __len__(self) -> int:
        """Get the number of sites in the disjoint-set."""
        return len(self.__parent)

    @property
    def policy(self) -> UnionFindPolicy:
        """Get the balancing and compression policy."""
        return self.__policy

    @property
    def parents(self) -> list[int]:
        """Get a copy of the parent of each site."""
        return list(self.__parent)

    @property
    def metrics(self) -> list[int]:
        """
        Get a copy of the balancing metric of each site.

        Only the values of root sites are meaningful.
        """
        return list(self.__metric)

    def size(self) -> int:
        """Get the number of sites in the disjoint-set."""
        return len(self.__parent)

    def component_count(self) -> int:
        """Get the number of disjoint components."""
        return self.__components

    def __validate(self, site: int) -> None:
        """Raise a `ValueError` if the site is not in `[0, n)`."""
        n = len(self.__parent)
        if (not isinstance(site, Integral) or isinstance(site, bool)
                or not 0 <= site < n):
            raise ValueError(
                f"Site {site!r} is not an integer between 0 and {n - 1}."
            )

    def find(self, site: int) -> int:
        """
        Find the root of the component containing the given site.

        Depending on the compression mode, this may shorten the path from the
        site to its root, but never changes the root itself, the number of
        components, or the metric of the root.

        Raises
        ------
        `ValueError` - If the site is not in `[0, n)`.
        """
        self.__validate(site)
        return self.__find_root(int(site))

    def __find_root_loop(self, site: int) -> int:
        parent = self.__parent
        while (next_ := parent[site]) != site:
            site = next_
        return site

    def __find_root_loop_compress(self, site: int) -> int:
        # First pass finds the root, second pass points the whole path at it.
        parent = self.__parent
        root = site
        while (next_ := parent[root]) != root:
            root = next_
        while (next_ := parent[site]) != root:
            parent[site] = root
            site = next_
        return root

    def __find_root_path_halve(self, site: int) -> int:
        # Point every checked site at its grandparent, then check the
        # grandparent next, skipping every other site on the path.
        parent = self.__parent
        while (next_ := parent[site]) != site:
            parent[site] = parent[next_]
            site = parent[site]
        return site

    def find_path(self, site: int) -> list[int]:
        """
        Find the current path from the given site to the root of its
        component, without compressing it.

        The path contains only the given site if and only if it is a root.
        """
        self.__validate(site)
        parent = self.__parent
        path: list[int] = [site]
        while (next_ := parent[site]) != site:
            path.append(next_)
            site = next_
        return path

    def height(self, site: int) -> int:
        """Get the number of links from the given site to its root."""
        return len(self.find_path(site)) - 1

    def connected(self, site_1: int, site_2: int) -> bool:
        """Determine whether the two sites are in the same component."""
        return self.find(site_1) == self.find(site_2)

    def union(self, site_1: int, site_2: int) -> int:
        """
        Union the components containing the given sites.

        The root with the smaller metric is attached below the root with the
        larger metric. If the sites are already connected the disjoint-set is
        unchanged.

        Returns
        -------
        `int` - The root of the combined component.

        Raises
        ------
        `ValueError` - If either site is not in `[0, n)`.
        """
        root_1 = self.find(site_1)
        root_2 = self.find(site_2)
        if root_1 == root_2:
            return root_1

        metric = self.__metric
        if self.__policy.balance is BalanceMetric.SIZE:
            if metric[root_1] > metric[root_2]:
                winner, loser = root_1, root_2
            else:
                winner, loser = root_2, root_1
            metric[winner] += metric[loser]
        else:
            if metric[root_1] < metric[root_2]:
                winner, loser = root_2, root_1
            else:
                winner, loser = root_1, root_2
            metric[winner] = max(metric[winner], metric[loser] + 1)

        self.__parent[loser] = winner
        self.__components -= 1
        return winner

    def connect(self, site_1: int, site_2: int) -> bool:
        """
        Ensure the two sites are connected.

        Returns whether the sites were previously disconnected (and so a union
        was performed).
        """
        if self.connected(site_1, site_2):
            return False
        self.union(site_1, site_2)
        return True
