"""
Random source abstraction for ensemble samplers.

Samplers never touch a global generator: entropy is drawn from an injected
``RandomSource`` so results are reproducible from the caller's seed.
A source instance is not thread-safe; concurrent callers should each hold
their own.
"""

from abc import ABC, abstractmethod
from typing import Callable, Optional, Tuple, Union

import numpy as np


class RandomSource(ABC):
    """
    Abstract source of i.i.d. standard-normal deviates.

    Subclasses implement ``next_gaussian``. ``standard_normal`` may be
    overridden with a vectorised draw, as long as it yields the same values
    as repeated ``next_gaussian`` calls in row-major order would.
    """

    @abstractmethod
    def next_gaussian(self) -> float:
        """Return one N(0, 1) deviate."""
        pass

    def standard_normal(self, shape: Union[int, Tuple[int, ...]]) -> np.ndarray:
        """
        Draw an array of N(0, 1) deviates.

        Parameters
        ----------
        shape : int or tuple of int
            Output shape. Entries are filled in row-major (C) order.

        Returns
        -------
        np.ndarray
            Float array of the requested shape.
        """
        out = np.empty(shape, dtype=float)
        flat = out.reshape(-1)
        for i in range(flat.size):
            flat[i] = self.next_gaussian()
        return out


class GeneratorSource(RandomSource):
    """
    RandomSource backed by ``numpy.random.Generator``.

    Parameters
    ----------
    seed : int, np.random.Generator or None
        Seed or existing generator. ``None`` draws fresh OS entropy.
    """

    def __init__(self, seed: Union[None, int, np.random.Generator] = None):
        if isinstance(seed, np.random.Generator):
            self.generator = seed
        else:
            self.generator = np.random.default_rng(seed)

    def next_gaussian(self) -> float:
        return float(self.generator.standard_normal())

    def standard_normal(self, shape: Union[int, Tuple[int, ...]]) -> np.ndarray:
        return self.generator.standard_normal(shape)

    def __repr__(self) -> str:
        return f"GeneratorSource({self.generator!r})"


class CallableSource(RandomSource):
    """
    RandomSource wrapping a zero-argument callable.

    Useful for replaying a fixed stream of deviates in tests.

    Examples
    --------
    >>> stream = iter([0.5, -1.0, 2.0])
    >>> src = CallableSource(lambda: next(stream))
    >>> src.standard_normal(3)
    array([ 0.5, -1. ,  2. ])
    """

    def __init__(self, fn: Callable[[], float]):
        self.fn = fn

    def next_gaussian(self) -> float:
        return float(self.fn())


def as_random_source(rng: Optional[Union[int, np.random.Generator, RandomSource]] = None
                     ) -> RandomSource:
    """
    Normalise the ``rng`` argument accepted by the samplers.

    Parameters
    ----------
    rng : None, int, np.random.Generator or RandomSource
        ``None`` creates an unseeded generator; an int is used as seed.

    Returns
    -------
    RandomSource
    """
    if isinstance(rng, RandomSource):
        return rng
    if rng is None or isinstance(rng, (int, np.integer, np.random.Generator)):
        return GeneratorSource(rng)
    raise TypeError(f"Cannot use {type(rng).__name__} as a random source")
